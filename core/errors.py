class AppError(Exception):
    """Base for failures that map straight onto an HTTP status and a short message."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidInput(AppError):
    status_code = 400
    message = "Invalid input"


class DuplicateUsername(AppError):
    status_code = 400
    message = "Username already taken"


class InvalidCredentials(AppError):
    status_code = 400
    message = "Invalid username or password"


class MissingToken(AppError):
    status_code = 401
    message = "Missing token"


class InvalidToken(AppError):
    status_code = 403
    message = "Invalid token"


class Forbidden(AppError):
    status_code = 403
    message = "Not authorized"


class NotFound(AppError):
    status_code = 404
    message = "Project not found"


class Internal(AppError):
    status_code = 500
    message = "Server error"
