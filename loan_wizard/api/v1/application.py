"""/v1/application, /v1/navigation, /v1/recovery - form state, routing, and recovery"""

from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, Query

from loan_wizard.api.v1.schemas import ApplicationStateResponse, NavigationResponse
from loan_wizard.api.dependencies import get_store
from loan_wizard.domain.models import RecoveryAction
from loan_wizard.state.store import FormStateStore

router = APIRouter()

LOAN_REQUEST_STEP = 3


def _state_response(store: FormStateStore) -> ApplicationStateResponse:
    return ApplicationStateResponse(
        data=store.state,
        application_id=store.application_id,
        status=store.status.value,
        is_submitting=store.is_submitting,
        error=store.error,
        current_route=store.navigator.current,
    )


@router.get("/application", response_model=ApplicationStateResponse)
def get_application(store: FormStateStore = Depends(get_store)):
    """Current draft, submission status, last error, and route"""
    return _state_response(store)


@router.patch("/application", response_model=ApplicationStateResponse)
def update_application(
    fields: Dict[str, Any] = Body(...),
    store: FormStateStore = Depends(get_store),
):
    """Merge draft fields without validating or submitting them"""
    store.update(fields)
    return _state_response(store)


@router.delete("/application", response_model=ApplicationStateResponse)
def reset_application(store: FormStateStore = Depends(get_store)):
    """Discard the draft and its saved copy, back to step 1"""
    store.reset()
    return _state_response(store)


@router.get("/navigation", response_model=NavigationResponse)
def navigate(
    path: str = Query(..., description="Requested wizard route"),
    store: FormStateStore = Depends(get_store),
):
    """Run the step guard for a route and move there (or to the redirect)"""
    decision = store.navigator.navigate(path, store.state)
    return NavigationResponse(
        allowed=decision.allowed,
        path=decision.path,
        redirect_to=decision.redirect_to,
        current_route=store.navigator.current,
    )


@router.post("/recovery/{action}", response_model=ApplicationStateResponse)
def recover(action: RecoveryAction, store: FormStateStore = Depends(get_store)):
    """
    Recovery after a failed affordability check.

    - reduce_loan_amount: back to the loan request step, draft kept
    - start_over: full reset
    """
    if action == RecoveryAction.REDUCE_LOAN_AMOUNT:
        store.navigator.go_to_step(LOAN_REQUEST_STEP)
    else:
        store.reset()
    return _state_response(store)
