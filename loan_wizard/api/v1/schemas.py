"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class IssueSchema(BaseModel):
    """Single field validation failure"""

    path: str
    message: str


class ValidationErrorResponse(BaseModel):
    """422 body when a section or the combined application is rejected"""

    section: str
    issues: List[IssueSchema]


class AffordabilityErrorResponse(BaseModel):
    """422 body when the financial step is not affordable"""

    message: str
    monthly_payment: float
    monthly_income: float
    monthly_expenses: float
    recovery_actions: List[str]


class StepResponse(BaseModel):
    """Response for POST /v1/steps/{step}"""

    status: str
    application_id: Optional[str] = None
    current_route: str


class ApplicationStateResponse(BaseModel):
    """Response for GET/PATCH/DELETE /v1/application"""

    data: Dict[str, Any] = Field(default_factory=dict)
    application_id: Optional[str] = None
    status: str
    is_submitting: bool
    error: Optional[str] = None
    current_route: str


class NavigationResponse(BaseModel):
    """Response for GET /v1/navigation"""

    allowed: bool
    path: str
    redirect_to: Optional[str] = None
    current_route: str
