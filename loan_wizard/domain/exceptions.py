"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class LoanServiceError(DomainException):
    """Remote record store returned an error or is unavailable"""

    pass


class StepValidationError(DomainException):
    """Section payload failed one or more validation rules"""

    def __init__(self, section: str, issues):
        self.section = section
        self.issues = list(issues)
        super().__init__(f"{section} failed validation with {len(self.issues)} issue(s)")


class AffordabilityError(DomainException):
    """Requested loan is not affordable given the financial profile"""

    def __init__(self, assessment):
        self.assessment = assessment
        super().__init__(assessment.message)
