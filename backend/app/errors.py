class AppError(Exception):
    """Base class for errors that map onto an HTTP status and a ``{"error": ...}`` body."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 400


class NotFoundError(AppError):
    """Raised for missing resources and for resources the requester does not own."""

    status_code = 404


class UnauthorizedError(AppError):
    status_code = 401
