"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Loan or sale inputs are malformed or out of range"""

    pass


class PaymentAlreadyPaidError(DomainException):
    """Payment record has already been marked paid"""

    pass
