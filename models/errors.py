"""
Errors raised by the PennyWise savings core
"""


class SavingsError(Exception):
    """Base class for savings core errors"""


class ValidationError(SavingsError, ValueError):
    """Invalid amount, deadline, name or member count"""


class NoEligibleGoalsError(ValidationError):
    """A positive delta has no individual goal to go to"""


class NotFoundError(SavingsError, LookupError):
    """Unknown goal id"""


class InsufficientDataError(SavingsError):
    """Projection requested without any transaction history"""


class DegenerateProjectionError(SavingsError):
    """Savings rate is zero, so completion cannot be projected"""
