from typing import Optional, Any


class SessionAuthError(Exception):
    """
    Base exception for SessionAuth application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(SessionAuthError):
    """
    Raised when input is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class ConflictError(SessionAuthError):
    """
    Raised when an identity (email or mobile) is already taken.
    Reported as 400, not 409.
    """
    def __init__(self, message: str = "User already exists with this email or mobile", details: Optional[Any] = None):
        super().__init__(message, code="CONFLICT", status_code=400, details=details)


class AuthError(SessionAuthError):
    """
    Raised on bad credentials or a missing session.
    """
    def __init__(self, message: str = "Invalid credentials", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)


class NotFoundError(SessionAuthError):
    """
    Raised when a referenced resource no longer exists.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)


class ServerError(SessionAuthError):
    """
    Raised when the store or other infrastructure fails.
    The message is generic; the cause is only logged.
    """
    def __init__(self, message: str = "Server error", details: Optional[Any] = None):
        super().__init__(message, code="INTERNAL_ERROR", status_code=500, details=details)


class StoreError(Exception):
    """
    Raised by the persistence layer when the document store fails.
    Never rendered to clients directly.
    """


class DuplicateUserError(StoreError):
    """
    Raised when a unique index rejects a user write.
    """
