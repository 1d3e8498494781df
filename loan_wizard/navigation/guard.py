"""Step navigation guard - pure route entry decisions"""

from typing import Any, List, Mapping

from loan_wizard.domain.models import FINAL_STEP, GuardDecision

ROUTE_PREFIX = "/loan-application"
SUCCESS_ROUTE = f"{ROUTE_PREFIX}/success"

# Fields that must carry a value before the success view may render
REQUIRED_TEXT_FIELDS = ("firstName", "lastName", "dateOfBirth", "email", "phone")
REQUIRED_NUMBER_FIELDS = ("loanAmount", "upfrontPayment", "terms", "monthlySalary")


def step_route(step: int) -> str:
    if not 1 <= step <= FINAL_STEP:
        raise ValueError(f"Unknown step: {step}")
    return f"{ROUTE_PREFIX}/step{step}"


FIRST_STEP_ROUTE = step_route(1)
STEP_ROUTES: List[str] = [step_route(step) for step in range(1, FINAL_STEP + 1)]
VALID_ROUTES: List[str] = STEP_ROUTES + [SUCCESS_ROUTE]


def normalize_path(path: str) -> str:
    """Fold the wizard entry points and trailing slashes onto canonical routes"""
    stripped = path.rstrip("/")
    if stripped in ("", ROUTE_PREFIX):
        return FIRST_STEP_ROUTE
    return stripped


def is_ready_for_success(record: Mapping[str, Any]) -> bool:
    """
    Presence check for the success view.

    Text fields must be non-empty and numeric fields must be set (zero is a
    meaningful upfront payment). No validation rules are re-run here.
    """
    if record.get("confirmed") is not True:
        return False
    if not all(record.get(name) for name in REQUIRED_TEXT_FIELDS):
        return False
    return all(record.get(name) is not None for name in REQUIRED_NUMBER_FIELDS)


def guard(path: str, record: Mapping[str, Any]) -> GuardDecision:
    """
    Decide whether a route may be entered given the current application record.

    - Unknown routes redirect to step 1
    - Step routes 1-5 are always allowed
    - The success route requires every finalization field to be present
    """
    route = normalize_path(path)

    if route not in VALID_ROUTES:
        return GuardDecision(allowed=False, path=route, redirect_to=FIRST_STEP_ROUTE)

    if route == SUCCESS_ROUTE and not is_ready_for_success(record):
        return GuardDecision(allowed=False, path=route, redirect_to=FIRST_STEP_ROUTE)

    return GuardDecision(allowed=True, path=route)
