"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when a submitted score sheet is malformed."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class NotFoundError(AppError):
    """Raised when a match id is not present in the current season."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class AuthorizationError(AppError):
    """Raised when a score-mutating call is made without an admin session."""

    def __init__(self, message="Admin login required."):
        """Initialize the error."""
        super().__init__(message, 401)


class PersistenceError(AppError):
    """Raised when the season document could not be written."""

    def __init__(self, message="Failed to save tournament data."):
        """Initialize the error."""
        super().__init__(message, 503)
