"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    code = "APP_ERROR"

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class InvalidInputError(AppError):
    """Raised when request data fails validation."""

    code = "INVALID_INPUT"

    def __init__(self, message="Invalid input."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    code = "NOT_FOUND"

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class InvalidStateError(AppError):
    """Raised when a record's lifecycle state forbids the operation."""

    code = "INVALID_STATE"

    def __init__(self, message="Tournament is not open for registration."):
        """Initialize the error."""
        super().__init__(message, 409)


class AlreadyRegisteredError(AppError):
    """Raised when a user joins a tournament they are already in."""

    code = "ALREADY_REGISTERED"

    def __init__(self, message="User is already registered for this tournament."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotRegisteredError(AppError):
    """Raised when a user leaves a tournament they are not in."""

    code = "NOT_REGISTERED"

    def __init__(self, message="User is not registered for this tournament."):
        """Initialize the error."""
        super().__init__(message, 409)


class TournamentFullError(AppError):
    """Raised when a tournament has no seats left."""

    code = "FULL"

    def __init__(self, message="Tournament is full."):
        """Initialize the error."""
        super().__init__(message, 409)


class ConflictError(AppError):
    """Raised when a conditional write loses against a concurrent update."""

    code = "CONFLICT"

    def __init__(
        self, message="Tournament was modified concurrently; reload and try again."
    ):
        """Initialize the error."""
        super().__init__(message, 409)


class UnauthenticatedError(AppError):
    """Raised when the caller's token is missing or cannot be verified."""

    code = "UNAUTHENTICATED"

    def __init__(self, message="Invalid or expired token."):
        """Initialize the error."""
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """Raised when a verified caller lacks the required role."""

    code = "FORBIDDEN"

    def __init__(self, message="Insufficient permissions."):
        """Initialize the error."""
        super().__init__(message, 403)


class AuditWriteError(AppError):
    """Raised by audit log writers when an entry cannot be persisted."""

    code = "AUDIT_WRITE_ERROR"

    def __init__(self, message="Failed to write audit log entry."):
        """Initialize the error."""
        super().__init__(message, 500)


class StoreError(AppError):
    """Raised when the entity store fails for reasons other than not found or conflict."""

    code = "STORE_ERROR"

    def __init__(self, message="The data store is unavailable."):
        """Initialize the error."""
        super().__init__(message, 503)
