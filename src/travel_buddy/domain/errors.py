"""Typed errors raised by the travel buddy core."""


class TravelBuddyError(Exception):
    """Base class for all classified errors."""

    code = "ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(TravelBuddyError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"


class AuthenticationError(TravelBuddyError):
    """The caller identity could not be established."""

    code = "AUTHENTICATION_ERROR"


class AuthorizationError(TravelBuddyError):
    """The caller is known but lacks permission."""

    code = "FORBIDDEN"


class NotFoundError(TravelBuddyError):
    """A referenced entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(TravelBuddyError):
    """A uniqueness constraint would be violated."""

    code = "CONFLICT"


class InvalidStateError(TravelBuddyError):
    """The operation is not valid for the entity's current state."""

    code = "INVALID_STATE"


class StoreError(TravelBuddyError):
    """Transient persistence or collaborator failure; safe to retry."""

    code = "STORE_UNAVAILABLE"
