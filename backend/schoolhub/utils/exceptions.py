"""Typed failures raised by services and rendered by the API error handler."""

class ServiceError(Exception):
    """Base class for failures surfaced to the caller."""
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message

class BadRequestError(ServiceError):
    """Request is well-formed but not acceptable (expired code, non-enrolled student)."""
    status_code = 400

class ForbiddenError(ServiceError):
    """Caller lacks the role or enrollment required for the target class."""
    status_code = 403

class NotFoundError(ServiceError):
    """Referenced class, session or join code does not exist."""
    status_code = 404

class CodeGenerationError(ServiceError):
    """No free join code was found within the retry bound."""
    status_code = 503
