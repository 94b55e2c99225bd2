"""Error taxonomy for task repository and board operations."""


class TaskError(Exception):
    """Base class for every recoverable task error.

    ``title`` is the heading shown above the message in notifications.
    """

    title = "Error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(TaskError):
    title = "Invalid Task"


class RateLimited(TaskError):
    title = "Rate Limit Exceeded"


class PermissionDenied(TaskError):
    title = "Permission Denied"


class NotFound(TaskError):
    title = "Not Found"


class UnknownError(TaskError):
    title = "Error"


def error_for_status(status_code: int, message: str) -> TaskError:
    """Build the error matching an HTTP status code."""
    if status_code == 429:
        return RateLimited(message, status_code)
    if status_code in (401, 403):
        return PermissionDenied(message, status_code)
    if status_code == 404:
        return NotFound(message, status_code)
    return UnknownError(message, status_code)
