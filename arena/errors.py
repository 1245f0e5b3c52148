"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class AuthenticationError(AppError):
    """Raised when a username/password pair does not match."""

    def __init__(self, message="Invalid username or password."):
        """Initialize the error."""
        super().__init__(message, 401)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class StoreError(Exception):
    """Raised when the realtime database cannot be reached or rejects a request."""

    def __init__(self, message, status_code=None):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class DecodeError(StoreError):
    """Raised when a response body is not valid JSON for the requested type."""


class PreconditionFailed(StoreError):
    """Raised when a conditional write loses against a newer version."""

    def __init__(self, message="ETag mismatch."):
        """Initialize the error."""
        super().__init__(message, 412)


class AllocationExhausted(StoreError):
    """Raised when a counter could not be advanced within the retry bound."""

    def __init__(self, counter_path, attempts):
        """Initialize the error."""
        super().__init__(
            f"Could not allocate an id from {counter_path} after {attempts} attempts."
        )
        self.counter_path = counter_path
        self.attempts = attempts
