"""POST /v1/steps/{step} - validate and submit one wizard step"""

import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Request

from loan_wizard.api.v1.schemas import AffordabilityErrorResponse, IssueSchema, StepResponse, ValidationErrorResponse
from loan_wizard.api.dependencies import get_request_id, get_store
from loan_wizard.domain.exceptions import AffordabilityError, StepValidationError
from loan_wizard.domain.models import FINAL_STEP, SubmissionStatus
from loan_wizard.state.step_checks import check_step
from loan_wizard.state.store import FormStateStore

router = APIRouter()


@router.post("/steps/{step}", response_model=StepResponse)
async def submit_step(
    request: Request,
    step: int = Path(..., ge=1, le=FINAL_STEP),
    payload: Dict[str, Any] = Body(...),
    store: FormStateStore = Depends(get_store),
):
    """
    Validate a step's section and hand it to the submission workflow.

    Flow:
    1. Section rules (plus affordability on step 4, combined rules on step 5)
    2. Create or update the remote record
    3. Commit the section and advance the route

    Errors:
    - 422: validation issues or an unaffordable loan
    - 502: the record store rejected or failed the request
    """
    request_id = get_request_id(request)

    try:
        section_data = check_step(step, payload, store.state)

    except StepValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=ValidationErrorResponse(
                section=e.section,
                issues=[IssueSchema(path=issue.path, message=issue.message) for issue in e.issues],
            ).model_dump(),
        )

    except AffordabilityError as e:
        assessment = e.assessment
        raise HTTPException(
            status_code=422,
            detail=AffordabilityErrorResponse(
                message=assessment.message,
                monthly_payment=assessment.monthly_payment,
                monthly_income=assessment.monthly_income,
                monthly_expenses=assessment.monthly_expenses,
                recovery_actions=[action.value for action in assessment.recovery_actions],
            ).model_dump(),
        )

    status = await store.submit_step(step, section_data)

    if status == SubmissionStatus.FAILED:
        logging.error(f"Record store error: {store.error}", extra={"request_id": request_id, "step": step})
        raise HTTPException(status_code=502, detail=store.error)

    return StepResponse(
        status=status.value,
        application_id=store.application_id,
        current_route=store.navigator.current,
    )
