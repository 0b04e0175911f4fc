class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced person or package id does not exist."""


class DuplicateKeyError(DomainError):
    """Raised when an insert collides with an existing id."""


class InvalidTransitionError(DomainError):
    """Raised when an operation would break the package/person state machine."""


class AlreadyCheckedOutError(InvalidTransitionError):
    """Raised when checking out a package that already left the mail room."""


class InvalidQueryError(DomainError):
    """Raised for unknown or malformed filter/sort directives."""


class UngroupedBatchInputError(DomainError):
    """Raised when batcher input is not grouped by person."""


class AuthenticationError(DomainError):
    """Raised when the admin password is wrong."""


class PartialBatchFailure(DomainError):
    """Raised when some items of a bulk operation failed.

    The full report (successes and failures) travels with the exception so the
    caller can surface exactly what went wrong.
    """

    def __init__(self, message: str, report):
        super().__init__(message)
        self.report = report
