"""Affordability check gating the financial-information step"""

from typing import Any, Mapping

from loan_wizard.domain.models import AffordabilityAssessment, RecoveryAction

# Share of disposable income that may go towards the loan installment
DISPOSABLE_INCOME_SHARE = 0.5

NOT_AFFORDABLE_MESSAGE = (
    "Based on your financial information, this loan amount may not be affordable. "
    "Please consider reducing the loan amount or starting over with a new application."
)


def assess_affordability(
    financial: Mapping[str, Any],
    loan_amount: float | None,
    terms: float | None,
) -> AffordabilityAssessment:
    """
    Compare half of the disposable monthly income with the estimated installment.

    Requirements:
    - Income is salary plus additional income; expenses are mortgage plus other credits
    - Amounts are taken as entered (missing counts as zero)
    - Installment is loan_amount / terms, with an unknown loan amount as 0 and unknown terms as 1
    - Not affordable when (income - expenses) * 0.5 < installment
    """
    monthly_income = (financial.get("monthlySalary") or 0) + (financial.get("additionalIncome") or 0)
    monthly_expenses = (financial.get("mortgage") or 0) + (financial.get("otherCredits") or 0)
    monthly_payment = (loan_amount or 0) / (terms or 1)

    if (monthly_income - monthly_expenses) * DISPOSABLE_INCOME_SHARE < monthly_payment:
        return AffordabilityAssessment(
            affordable=False,
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            monthly_payment=monthly_payment,
            message=NOT_AFFORDABLE_MESSAGE,
            recovery_actions=[RecoveryAction.REDUCE_LOAN_AMOUNT, RecoveryAction.START_OVER],
        )

    return AffordabilityAssessment(
        affordable=True,
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_payment=monthly_payment,
    )
