"""Pre-submission checks for a step: section rules, affordability, and the combined pass"""

import logging
from datetime import date
from typing import Any, Dict, Mapping

from loan_wizard.domain.affordability import assess_affordability
from loan_wizard.domain.exceptions import AffordabilityError, StepValidationError
from loan_wizard.domain.models import FINAL_STEP, SECTIONS
from loan_wizard.domain.validation import split_sections, validate_application, validate_step
from loan_wizard.infrastructure.observability.metrics import (
    affordability_rejection_counter,
    record_validation_failure,
)

logger = logging.getLogger(__name__)

FINANCIAL_STEP = 4


def check_step(
    step: int,
    payload: Any,
    record: Mapping[str, Any],
    today: date | None = None,
) -> Dict[str, Any]:
    """
    Validate a step payload against everything that gates its submission.

    - Every step: its own section rules
    - Financial step: affordability against the loan already requested
    - Final step: the combined application check over record + payload

    Returns:
        The validated section data, ready for FormStateStore.submit_step

    Raises:
        StepValidationError: Section or combined rules failed
        AffordabilityError: Financial step is not affordable
    """
    section = SECTIONS.get(step)
    if section is None:
        raise ValueError(f"Unknown step: {step}")

    result = validate_step(step, payload, today)
    if not result.ok:
        record_validation_failure(section)
        logger.info("Section rejected", extra={"step": step, "issues": len(result.issues)})
        raise StepValidationError(section, result.issues)

    section_data = result.data

    if step == FINANCIAL_STEP:
        assessment = assess_affordability(section_data, record.get("loanAmount"), record.get("terms"))
        if not assessment.affordable:
            affordability_rejection_counter.inc()
            logger.info(
                "Loan not affordable",
                extra={
                    "monthly_payment": assessment.monthly_payment,
                    "monthly_income": assessment.monthly_income,
                    "monthly_expenses": assessment.monthly_expenses,
                },
            )
            raise AffordabilityError(assessment)

    if step == FINAL_STEP:
        combined = validate_application(split_sections({**record, **section_data}), today)
        if not combined.ok:
            record_validation_failure("application")
            logger.info("Application rejected", extra={"issues": len(combined.issues)})
            raise StepValidationError("application", combined.issues)

    return section_data
