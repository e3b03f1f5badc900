"""Domain exceptions."""


class PermitrackError(Exception):
    """Base exception for Permitrack."""

    pass


class ValidationError(PermitrackError):
    """Validation failed for input data."""

    pass


class SelfDeletionError(ValidationError):
    """User attempted to delete their own account."""

    def __init__(self) -> None:
        super().__init__("Cannot delete your own account")


class AuthenticationError(PermitrackError):
    """No usable credential was presented."""

    REQUIRED = "Authentication required"
    INVALID_TOKEN = "Invalid token"
    TOKEN_EXPIRED = "Token expired"
    USER_GONE = "User no longer exists"
    INVALID_CREDENTIALS = "Invalid credentials"

    def __init__(self, message: str = REQUIRED) -> None:
        super().__init__(message)


class AuthorizationError(PermitrackError):
    """Authenticated user lacks a capability or region access."""

    PERMISSION_DENIED = "Permission denied"
    ACCESS_DENIED = "Access denied"

    def __init__(self, message: str = PERMISSION_DENIED) -> None:
        super().__init__(message)


class NotFound(PermitrackError):
    """Requested resource was not found."""

    def __init__(self, entity: str, identifier: str | None = None) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found")


class ConflictError(PermitrackError):
    """Uniqueness constraint violated."""

    pass


class StateError(PermitrackError):
    """Requested lifecycle transition is not valid from the current state."""

    pass


class InternalError(PermitrackError):
    """Persistence or unexpected failure."""

    pass
