class DomainError(Exception):
    """Base exception for business rule violations.

    ``status_code`` is the HTTP status the controller layer answers with.
    """

    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing, malformed or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when credentials or the bearer token are missing or invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when an identity lacks the role required for an action."""

    status_code = 403


class ConflictError(DomainError):
    """Raised when the requested transition clashes with the current state."""


class AlreadyCheckedInError(ConflictError):
    pass


class AlreadyCheckedOutError(ConflictError):
    pass


class NotFoundError(DomainError):
    status_code = 404


class AccountNotFoundError(NotFoundError):
    pass


class NotCheckedInError(NotFoundError):
    status_code = 400


class InvalidOtpError(NotFoundError):
    status_code = 400


class UnavailableError(DomainError):
    """Raised when a collaborator (store, mail channel) cannot serve the request."""

    status_code = 503


class StoreUnavailableError(UnavailableError):
    pass


class DeliveryError(UnavailableError):
    pass
