"""Unit tests for the section validators and the combined application check"""

import pytest
from datetime import date
from loan_wizard.domain.validation import (
    split_sections,
    validate_application,
    validate_contact_details,
    validate_finalization,
    validate_financial_information,
    validate_loan_request,
    validate_personal_information,
    validate_step,
)

TODAY = date(2026, 10, 19)


def _personal(**overrides):
    payload = {"firstName": "Anna", "lastName": "Müller", "dateOfBirth": "1990-05-15"}
    payload.update(overrides)
    return payload


# Personal information

def test_personal_information_accepts_german_letters():
    result = validate_personal_information(_personal(firstName="Jürgen", lastName="von Köß"), today=TODAY)

    assert result.ok
    assert result.data == {"firstName": "Jürgen", "lastName": "von Köß", "dateOfBirth": "1990-05-15"}


def test_first_name_must_be_single_token():
    result = validate_personal_information(_personal(firstName="Anna Maria"), today=TODAY)

    assert result.messages_for("firstName") == ["Only a single name is allowed"]


def test_first_name_required():
    result = validate_personal_information(_personal(firstName=""), today=TODAY)

    assert result.messages_for("firstName") == ["First name is required"]


@pytest.mark.parametrize("name", ["Ana1", "Zoë", "O'Neil"])
def test_names_reject_other_characters(name):
    result = validate_personal_information(_personal(lastName=name), today=TODAY)

    assert result.messages_for("lastName") == ["Only Latin and German letters are allowed"]


def test_hyphenated_first_name_is_single_token():
    assert validate_personal_information(_personal(firstName="Anna-Lena"), today=TODAY).ok


def test_age_exactly_79_rejects():
    result = validate_personal_information(_personal(dateOfBirth="1947-10-19"), today=TODAY)

    assert result.messages_for("dateOfBirth") == ["Maximum age allowed is 79 years"]


def test_age_one_day_short_of_79_accepts():
    result = validate_personal_information(_personal(dateOfBirth="1947-10-20"), today=TODAY)

    assert result.ok


def test_birthday_later_this_year_counts_one_year_less():
    # 79 by calendar year, 78 until December
    assert validate_personal_information(_personal(dateOfBirth="1947-12-01"), today=TODAY).ok
    assert not validate_personal_information(_personal(dateOfBirth="1947-01-01"), today=TODAY).ok


def test_invalid_date_reported_on_field():
    result = validate_personal_information(_personal(dateOfBirth="not-a-date"), today=TODAY)

    assert [issue.path for issue in result.issues] == ["dateOfBirth"]


def test_all_field_failures_reported_together():
    result = validate_personal_information({"firstName": "Anna Maria", "lastName": "M3"}, today=TODAY)

    assert {issue.path for issue in result.issues} == {"firstName", "lastName", "dateOfBirth"}


# Contact details

def test_contact_details_accepts_valid_values():
    result = validate_contact_details({"email": "anna@example.com", "phone": "+4917012345"})

    assert result.ok


def test_invalid_email():
    result = validate_contact_details({"email": "anna@", "phone": "+4917012345"})

    assert result.messages_for("email") == ["Invalid email format"]


@pytest.mark.parametrize("phone", ["4917012345", "+0123456", "+1", "+1234567890123456", "+49 170 1234", "+491701234567\n"])
def test_phone_must_be_e164(phone):
    result = validate_contact_details({"email": "anna@example.com", "phone": phone})

    assert result.messages_for("phone") == ["Phone must be in E.164 format (e.g., +1234567890)"]


# Loan request

@pytest.mark.parametrize(
    "loan_amount, upfront_payment",
    [(10000, 10000), (20000, 25000), (70000, 70000)],
)
def test_upfront_payment_not_below_loan_amount_rejects(loan_amount, upfront_payment):
    result = validate_loan_request(
        {"loanAmount": loan_amount, "upfrontPayment": upfront_payment, "terms": 12}
    )

    assert [issue.path for issue in result.issues] == ["upfrontPayment"]
    assert result.issues[0].message == "Upfront payment must be less than the loan amount"


def test_upfront_payment_below_loan_amount_accepts():
    result = validate_loan_request({"loanAmount": 10000, "upfrontPayment": 9999, "terms": 12})

    assert result.ok
    assert result.data == {"loanAmount": 10000, "upfrontPayment": 9999, "terms": 12}


@pytest.mark.parametrize(
    "loan_amount, message",
    [(9999, "Loan amount must be at least €10,000"), (70001, "Loan amount cannot exceed €70,000")],
)
def test_loan_amount_range(loan_amount, message):
    result = validate_loan_request({"loanAmount": loan_amount, "upfrontPayment": 0, "terms": 12})

    assert result.messages_for("loanAmount") == [message]


def test_negative_upfront_payment():
    result = validate_loan_request({"loanAmount": 20000, "upfrontPayment": -1, "terms": 12})

    assert result.messages_for("upfrontPayment") == ["Upfront payment cannot be negative"]


@pytest.mark.parametrize("terms", [9, 31, 0, 100])
def test_terms_outside_range_rejects(terms):
    result = validate_loan_request({"loanAmount": 20000, "upfrontPayment": 0, "terms": terms})

    assert result.messages_for("terms") == ["Loan terms must be between 10 and 30 months"]


@pytest.mark.parametrize("terms", [12.5, 10.1, 29.99])
def test_fractional_terms_rejects(terms):
    result = validate_loan_request({"loanAmount": 20000, "upfrontPayment": 0, "terms": terms})

    assert result.messages_for("terms") == ["Please enter a whole number of months"]


@pytest.mark.parametrize("terms", [10, 20, 30, 15.0])
def test_terms_inside_range_accepts(terms):
    result = validate_loan_request({"loanAmount": 20000, "upfrontPayment": 0, "terms": terms})

    assert result.ok
    assert result.data["terms"] == int(terms)


def test_cross_field_rule_waits_for_valid_fields():
    # upfront >= loan would also fail, but the field error comes alone
    result = validate_loan_request({"loanAmount": 5000, "upfrontPayment": 8000, "terms": 12})

    assert [issue.path for issue in result.issues] == ["loanAmount"]


# Financial information

def test_financial_information_without_optional_items():
    result = validate_financial_information(
        {"monthlySalary": 3000, "hasAdditionalIncome": False, "hasMortgage": False, "hasOtherCredits": False}
    )

    assert result.ok


def test_negative_salary():
    result = validate_financial_information({"monthlySalary": -5})

    assert result.messages_for("monthlySalary") == ["Monthly salary is required"]


@pytest.mark.parametrize(
    "flag, amount",
    [("hasAdditionalIncome", "additionalIncome"), ("hasMortgage", "mortgage"), ("hasOtherCredits", "otherCredits")],
)
def test_flagged_item_requires_amount(flag, amount):
    result = validate_financial_information({"monthlySalary": 3000, flag: True})

    assert [issue.path for issue in result.issues] == [amount]
    assert result.issues[0].message == "Please fill in all marked financial fields"


def test_flagged_item_rejects_zero_amount():
    result = validate_financial_information({"monthlySalary": 3000, "hasMortgage": True, "mortgage": 0})

    assert result.messages_for("mortgage") == ["Please fill in all marked financial fields"]


def test_unflagged_amount_is_ignored():
    result = validate_financial_information(
        {"monthlySalary": 3000, "hasOtherCredits": False, "otherCredits": 0}
    )

    assert result.ok


def test_each_incomplete_pair_reported():
    result = validate_financial_information(
        {"monthlySalary": 3000, "hasAdditionalIncome": True, "hasOtherCredits": True}
    )

    assert [issue.path for issue in result.issues] == ["additionalIncome", "otherCredits"]


# Finalization

def test_finalization_requires_true():
    assert validate_finalization({"confirmed": True}).ok
    assert validate_finalization({"confirmed": False}).messages_for("confirmed") == [
        "You must confirm the data to proceed"
    ]


def test_finalization_rejects_truthy_non_boolean():
    assert not validate_finalization({"confirmed": "yes"}).ok


def test_validate_step_maps_to_section():
    assert validate_step(3, {"loanAmount": 20000, "upfrontPayment": 0, "terms": 12}).ok

    with pytest.raises(ValueError):
        validate_step(6, {})


# Combined application

def test_complete_application_accepts(application_sections):
    result = validate_application(application_sections, today=TODAY)

    assert result.ok
    assert set(result.data) == set(application_sections)


def test_section_issues_are_prefixed(application_sections):
    application_sections["loanRequest"] = {"loanAmount": 20000, "upfrontPayment": 20000, "terms": 20}

    result = validate_application(application_sections, today=TODAY)

    assert [issue.path for issue in result.issues] == ["loanRequest.upfrontPayment"]


def test_missing_section_is_reported(application_sections):
    del application_sections["contactDetails"]

    result = validate_application(application_sections, today=TODAY)

    assert [issue.path for issue in result.issues] == ["contactDetails"]


def test_insufficient_income_attributed_to_loan_amount(application_sections):
    application_sections["loanRequest"] = {"loanAmount": 20000, "upfrontPayment": 0, "terms": 20}
    application_sections["financialInformation"] = {
        "monthlySalary": 1000,
        "hasAdditionalIncome": False,
        "hasMortgage": False,
        "hasOtherCredits": False,
    }

    result = validate_application(application_sections, today=TODAY)

    assert [issue.path for issue in result.issues] == ["loanRequest.loanAmount"]
    message = result.issues[0].message
    assert "Your monthly net income (1000.00) is insufficient" in message
    assert "You need at least 2000.00 per month" in message


def test_net_income_counts_only_active_items(application_sections):
    application_sections["financialInformation"] = {
        "monthlySalary": 1500,
        "hasAdditionalIncome": True,
        "additionalIncome": 1000,
        "hasMortgage": True,
        "mortgage": 400,
        "hasOtherCredits": False,
        "otherCredits": 5000,
    }

    # 1500 + 1000 - 400 = 2100 >= 2000
    assert validate_application(application_sections, today=TODAY).ok

    application_sections["financialInformation"]["hasOtherCredits"] = True
    result = validate_application(application_sections, today=TODAY)

    assert "(-2900.00)" in result.messages_for("loanRequest.loanAmount")[0]


def test_age_at_maturity_attributed_to_terms(application_sections):
    # 77 now, 30 months runs to 79.5; 78 now runs to 80.5
    application_sections["personalInformation"]["dateOfBirth"] = "1949-01-01"
    application_sections["loanRequest"]["terms"] = 30
    assert validate_application(application_sections, today=TODAY).ok

    application_sections["personalInformation"]["dateOfBirth"] = "1948-01-01"
    result = validate_application(application_sections, today=TODAY)

    assert result.messages_for("loanRequest.terms") == [
        "The combination of loan terms and your age would exceed the maximum allowed age of 80 years"
    ]


def test_both_cross_step_failures_reported(application_sections):
    application_sections["personalInformation"]["dateOfBirth"] = "1948-01-01"
    application_sections["loanRequest"] = {"loanAmount": 60000, "upfrontPayment": 0, "terms": 30}
    application_sections["financialInformation"]["monthlySalary"] = 1000

    result = validate_application(application_sections, today=TODAY)

    assert [issue.path for issue in result.issues] == ["loanRequest.terms", "loanRequest.loanAmount"]


def test_cross_step_rules_skip_when_a_section_fails(application_sections):
    application_sections["financialInformation"]["monthlySalary"] = 1
    application_sections["finalization"] = {"confirmed": False}

    result = validate_application(application_sections, today=TODAY)

    assert [issue.path for issue in result.issues] == ["finalization.confirmed"]


def test_split_sections(complete_record):
    sections = split_sections({**complete_record, "id": "app-1"})

    assert sections["loanRequest"] == {"loanAmount": 20000, "upfrontPayment": 2000, "terms": 20}
    assert sections["finalization"] == {"confirmed": True}
    assert all("id" not in section for section in sections.values())
