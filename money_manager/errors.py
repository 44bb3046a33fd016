"""
Domain errors.

Services raise these; the API layer turns them into HTTP
responses using the status code each class carries. They
subclass ValueError so callers that only care about "bad
input" can keep catching ValueError.
"""


class MoneyManagerError(ValueError):
    """Base class for all domain errors."""

    status_code: int = 400


class ValidationError(MoneyManagerError):
    """Missing or invalid input."""

    status_code = 400


class NotFoundError(MoneyManagerError):
    """The requested record does not exist."""

    status_code = 404


class EditWindowExpiredError(MoneyManagerError):
    """The entry is older than the edit window and can no longer change."""

    status_code = 403


class ConflictError(MoneyManagerError):
    """Uniqueness violation, e.g. a duplicate account name."""

    status_code = 409
