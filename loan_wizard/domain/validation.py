"""Validation rule set - per-step section schemas plus the combined application check"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Type, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from loan_wizard.domain.models import SECTIONS, FieldIssue, ValidationResult
from loan_wizard.utils.date_utils import age_on

LATIN_AND_GERMAN_LETTERS = re.compile(r"^[a-zA-ZäöüßÄÖÜ\s-]+$")
E164_PHONE = re.compile(r"^\+[1-9]\d{1,14}$")

MAX_AGE = 79
MAX_AGE_AT_MATURITY = 80
MIN_LOAN_AMOUNT = 10_000
MAX_LOAN_AMOUNT = 70_000
MIN_TERMS = 10
MAX_TERMS = 30
INCOME_TO_INSTALLMENT_RATIO = 2

FINANCIAL_FIELDS_MESSAGE = "Please fill in all marked financial fields"

Amount = Union[int, float]


def _as_number(v: float) -> Amount:
    """Drop the fractional part of whole amounts so 20000.0 is stored as 20000"""
    return int(v) if float(v).is_integer() else v


def _today(info: ValidationInfo) -> date:
    context = info.context or {}
    return context.get("today") or date.today()


class SectionSchema(BaseModel):
    """Base for section payloads: camelCase on the wire, unknown keys dropped"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        allow_inf_nan=False,
    )


class PersonalInformation(SectionSchema):
    first_name: str
    last_name: str
    date_of_birth: date

    @field_validator("first_name")
    @classmethod
    def first_name_valid(cls, v: str) -> str:
        if not v:
            raise ValueError("First name is required")
        if not LATIN_AND_GERMAN_LETTERS.fullmatch(v):
            raise ValueError("Only Latin and German letters are allowed")
        if " " in v:
            raise ValueError("Only a single name is allowed")
        return v

    @field_validator("last_name")
    @classmethod
    def last_name_valid(cls, v: str) -> str:
        if not v:
            raise ValueError("Last name is required")
        if not LATIN_AND_GERMAN_LETTERS.fullmatch(v):
            raise ValueError("Only Latin and German letters are allowed")
        return v

    @field_validator("date_of_birth")
    @classmethod
    def below_max_age(cls, v: date, info: ValidationInfo) -> date:
        if age_on(v, _today(info)) >= MAX_AGE:
            raise ValueError(f"Maximum age allowed is {MAX_AGE} years")
        return v


class ContactDetails(SectionSchema):
    email: str
    phone: str

    @field_validator("email")
    @classmethod
    def email_valid(cls, v: str) -> str:
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email format")
        return v

    @field_validator("phone")
    @classmethod
    def phone_e164(cls, v: str) -> str:
        if not E164_PHONE.fullmatch(v):
            raise ValueError("Phone must be in E.164 format (e.g., +1234567890)")
        return v


class LoanRequest(SectionSchema):
    loan_amount: float
    upfront_payment: float
    terms: float

    @field_validator("loan_amount")
    @classmethod
    def loan_amount_in_range(cls, v: float) -> Amount:
        if v < MIN_LOAN_AMOUNT:
            raise ValueError("Loan amount must be at least €10,000")
        if v > MAX_LOAN_AMOUNT:
            raise ValueError("Loan amount cannot exceed €70,000")
        return _as_number(v)

    @field_validator("upfront_payment")
    @classmethod
    def upfront_payment_non_negative(cls, v: float) -> Amount:
        if v < 0:
            raise ValueError("Upfront payment cannot be negative")
        return _as_number(v)

    @field_validator("terms")
    @classmethod
    def terms_whole_months(cls, v: float) -> int:
        if not float(v).is_integer():
            raise ValueError("Please enter a whole number of months")
        if not MIN_TERMS <= v <= MAX_TERMS:
            raise ValueError(f"Loan terms must be between {MIN_TERMS} and {MAX_TERMS} months")
        return int(v)


class FinancialInformation(SectionSchema):
    monthly_salary: float
    has_additional_income: bool = False
    additional_income: Optional[float] = None
    has_mortgage: bool = False
    mortgage: Optional[float] = None
    has_other_credits: bool = False
    other_credits: Optional[float] = None

    @field_validator("monthly_salary")
    @classmethod
    def salary_non_negative(cls, v: float) -> Amount:
        if v < 0:
            raise ValueError("Monthly salary is required")
        return _as_number(v)

    @field_validator("additional_income", "mortgage", "other_credits")
    @classmethod
    def optional_amount(cls, v: Optional[float]) -> Optional[Amount]:
        return None if v is None else _as_number(v)


class Finalization(SectionSchema):
    confirmed: StrictBool

    @field_validator("confirmed")
    @classmethod
    def must_confirm(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("You must confirm the data to proceed")
        return v


# Cross-field rules (second pass over a section that passed its field rules)

Refinement = Callable[[SectionSchema], List[FieldIssue]]


def upfront_below_loan_amount(model: LoanRequest) -> List[FieldIssue]:
    if model.upfront_payment >= model.loan_amount:
        return [FieldIssue("upfrontPayment", "Upfront payment must be less than the loan amount")]
    return []


@dataclass(frozen=True)
class ConditionalAmount:
    """
    A boolean gate paired with the amount it unlocks, evaluated as one unit.

    When the gate is on, the amount must be present and non-zero; when it is
    off the amount is ignored, both for validation and for income arithmetic.
    """

    flag: str
    amount: str
    message: str = FINANCIAL_FIELDS_MESSAGE

    def active_value(self, model: SectionSchema) -> float:
        if not getattr(model, self.flag):
            return 0
        return getattr(model, self.amount) or 0

    def __call__(self, model: SectionSchema) -> List[FieldIssue]:
        if getattr(model, self.flag) and not getattr(model, self.amount):
            return [FieldIssue(to_camel(self.amount), self.message)]
        return []


ADDITIONAL_INCOME = ConditionalAmount("has_additional_income", "additional_income")
MORTGAGE = ConditionalAmount("has_mortgage", "mortgage")
OTHER_CREDITS = ConditionalAmount("has_other_credits", "other_credits")


@dataclass(frozen=True)
class Section:
    """A section schema plus its cross-field refinements"""

    name: str
    schema: Type[SectionSchema]
    refinements: Tuple[Refinement, ...] = ()

    def field_paths(self) -> List[str]:
        return [info.alias or name for name, info in self.schema.model_fields.items()]


SECTION_RULES: Dict[str, Section] = {
    "personalInformation": Section("personalInformation", PersonalInformation),
    "contactDetails": Section("contactDetails", ContactDetails),
    "loanRequest": Section("loanRequest", LoanRequest, (upfront_below_loan_amount,)),
    "financialInformation": Section(
        "financialInformation",
        FinancialInformation,
        (ADDITIONAL_INCOME, MORTGAGE, OTHER_CREDITS),
    ),
    "finalization": Section("finalization", Finalization),
}


def _join(prefix: str, path: str) -> str:
    return ".".join(part for part in (prefix, path) if part)


def _issues_from(exc: ValidationError, prefix: str = "") -> List[FieldIssue]:
    """Flatten a pydantic error into dotted-path issues, keeping raw rule messages"""
    issues = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        if err["type"] == "value_error":
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        issues.append(FieldIssue(_join(prefix, path), message))
    return issues


def _run_section(
    section: Section,
    payload: Any,
    today: date,
    prefix: str = "",
) -> Tuple[Optional[SectionSchema], List[FieldIssue]]:
    try:
        model = section.schema.model_validate(payload, context={"today": today})
    except ValidationError as e:
        return None, _issues_from(e, prefix)

    issues = [
        FieldIssue(_join(prefix, issue.path), issue.message)
        for refine in section.refinements
        for issue in refine(model)
    ]
    if issues:
        return None, issues
    return model, []


def _dump(model: SectionSchema) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def validate_section(name: str, payload: Any, today: date | None = None) -> ValidationResult:
    """
    Validate one section payload standalone.

    Field rules run first and all of their failures are reported together.
    Cross-field rules run only once the fields themselves are well-formed.
    """
    if name not in SECTION_RULES:
        raise ValueError(f"Unknown section: {name}")

    model, issues = _run_section(SECTION_RULES[name], payload, today or date.today())
    if model is None:
        return ValidationResult(issues=issues)
    return ValidationResult(data=_dump(model))


def validate_personal_information(payload: Any, today: date | None = None) -> ValidationResult:
    return validate_section("personalInformation", payload, today)


def validate_contact_details(payload: Any, today: date | None = None) -> ValidationResult:
    return validate_section("contactDetails", payload, today)


def validate_loan_request(payload: Any, today: date | None = None) -> ValidationResult:
    return validate_section("loanRequest", payload, today)


def validate_financial_information(payload: Any, today: date | None = None) -> ValidationResult:
    return validate_section("financialInformation", payload, today)


def validate_finalization(payload: Any, today: date | None = None) -> ValidationResult:
    return validate_section("finalization", payload, today)


def validate_step(step: int, payload: Any, today: date | None = None) -> ValidationResult:
    """Validate the section owned by a 1-indexed wizard step"""
    if step not in SECTIONS:
        raise ValueError(f"Unknown step: {step}")
    return validate_section(SECTIONS[step], payload, today)


# Cross-step rules (second pass over the assembled application)

CrossStepRule = Callable[[Mapping[str, SectionSchema], date], List[FieldIssue]]


def maturity_age_rule(models: Mapping[str, SectionSchema], today: date) -> List[FieldIssue]:
    """Age now plus the loan duration in years must stay below the maturity ceiling"""
    age = age_on(models["personalInformation"].date_of_birth, today)
    if models["loanRequest"].terms / 12 + age >= MAX_AGE_AT_MATURITY:
        return [
            FieldIssue(
                "loanRequest.terms",
                "The combination of loan terms and your age would exceed the maximum "
                f"allowed age of {MAX_AGE_AT_MATURITY} years",
            )
        ]
    return []


def net_income_rule(models: Mapping[str, SectionSchema], today: date) -> List[FieldIssue]:
    """
    Monthly net income must cover twice the plain monthly installment.

    Net income = salary + active additional income - active mortgage - active
    other credits, where inactive items (flag off) count as zero.
    """
    financial = models["financialInformation"]
    loan = models["loanRequest"]

    monthly_net_income = (
        financial.monthly_salary
        + ADDITIONAL_INCOME.active_value(financial)
        - MORTGAGE.active_value(financial)
        - OTHER_CREDITS.active_value(financial)
    )
    minimum_required_income = (loan.loan_amount / loan.terms) * INCOME_TO_INSTALLMENT_RATIO

    if monthly_net_income < minimum_required_income:
        return [
            FieldIssue(
                "loanRequest.loanAmount",
                f"Your monthly net income ({monthly_net_income:.2f}) is insufficient for the "
                f"requested loan amount. You need at least {minimum_required_income:.2f} per month. "
                "Please reduce the loan amount or increase your income.",
            )
        ]
    return []


CROSS_STEP_RULES: Tuple[CrossStepRule, ...] = (maturity_age_rule, net_income_rule)


def validate_application(application: Mapping[str, Any], today: date | None = None) -> ValidationResult:
    """
    Validate the complete application, keyed by section name.

    Pass 1: each section is validated independently; issue paths are prefixed
    with the section name (e.g. "loanRequest.upfrontPayment").
    Pass 2: cross-step rules run only when every section passed pass 1.

    Returns the validated data keyed by section on success.
    """
    today = today or date.today()
    models: Dict[str, SectionSchema] = {}
    issues: List[FieldIssue] = []

    for name, section in SECTION_RULES.items():
        model, section_issues = _run_section(section, application.get(name), today, prefix=name)
        if model is None:
            issues.extend(section_issues)
        else:
            models[name] = model

    if issues:
        return ValidationResult(issues=issues)

    for rule in CROSS_STEP_RULES:
        issues.extend(rule(models, today))

    if issues:
        return ValidationResult(issues=issues)
    return ValidationResult(data={name: _dump(model) for name, model in models.items()})


def split_sections(record: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Project a flat application record onto per-section payloads"""
    return {
        name: {path: record[path] for path in section.field_paths() if path in record}
        for name, section in SECTION_RULES.items()
    }
