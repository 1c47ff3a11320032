"""Custom exceptions for the expense endpoint."""

from typing import Optional


class ExpenseTrackerException(Exception):
    """Base exception for all expense endpoint errors."""

    def __init__(self, message: str, status_code: int = 500, details: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationError(ExpenseTrackerException):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class PayloadTooLargeError(ExpenseTrackerException):
    """Raised when the request body exceeds the configured limit."""

    def __init__(self, message: str = "Request body too large"):
        super().__init__(message, status_code=413)


class RequestBodyError(ExpenseTrackerException):
    """Raised when the request body cannot be read."""

    def __init__(self, details: str, message: str = "Server error"):
        super().__init__(message, status_code=500, details=details)
