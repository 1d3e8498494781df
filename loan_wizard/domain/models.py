"""Domain models - pure Python dataclasses representing wizard entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Step number → section name (steps are 1-indexed)
SECTIONS: Dict[int, str] = {
    1: "personalInformation",
    2: "contactDetails",
    3: "loanRequest",
    4: "financialInformation",
    5: "finalization",
}

FINAL_STEP = 5


@dataclass(frozen=True)
class FieldIssue:
    """Single validation failure routed to a field path (dotted, camelCase)"""

    path: str
    message: str


@dataclass
class ValidationResult:
    """Outcome of running a validator: coerced data or a list of issues"""

    data: Optional[Dict[str, Any]] = None
    issues: List[FieldIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def messages_for(self, path: str) -> List[str]:
        return [issue.message for issue in self.issues if issue.path == path]


class SubmissionStatus(str, Enum):
    """States of a single step submission"""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


class RecoveryAction(str, Enum):
    """Ways out of a failed affordability check"""

    REDUCE_LOAN_AMOUNT = "reduce_loan_amount"
    START_OVER = "start_over"


@dataclass
class AffordabilityAssessment:
    """Result of the step-4 affordability check"""

    affordable: bool
    monthly_income: float
    monthly_expenses: float
    monthly_payment: float
    message: Optional[str] = None
    recovery_actions: List[RecoveryAction] = field(default_factory=list)


@dataclass(frozen=True)
class GuardDecision:
    """Route entry decision: allow the requested path or redirect elsewhere"""

    allowed: bool
    path: str
    redirect_to: Optional[str] = None
