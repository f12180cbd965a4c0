"""
Custom exception classes

Raised by the service layer and translated to responses by FastAPI. The
response body is ``{"detail": {"error": ..., ["details": ...]}}``.
"""
from typing import Iterable, Optional

from fastapi import HTTPException

from app.core.config import settings


class ServiceError(HTTPException):
    """Base class: a status code plus a human-readable message"""
    def __init__(self, status_code: int, error: str, details: Optional[str] = None):
        self.error = error
        body = {"error": error}
        if details is not None:
            body["details"] = details
        super().__init__(status_code=status_code, detail=body)


class CaseNotFoundError(ServiceError):
    """Raised when no case matches the national ID"""
    def __init__(self, national_id: str):
        super().__init__(404, f"Case {national_id} not found")


class FormNotFoundError(ServiceError):
    """Raised when a case has no socioeconomic form"""
    def __init__(self, national_id: str):
        super().__init__(404, f"Socioeconomic form for case {national_id} not found")


class ActivityNotFoundError(ServiceError):
    def __init__(self, activity_id: int):
        super().__init__(404, f"Activity {activity_id} not found")


class CaseConflictError(ServiceError):
    """Raised when the target national ID is already taken"""
    def __init__(self, national_id: str, operation: str = "create"):
        if operation == "migrate":
            message = f"National ID {national_id} already exists. The case cannot be migrated."
        else:
            message = f"A case with national ID {national_id} already exists"
        super().__init__(409, message)


class NoFieldsToUpdateError(ServiceError):
    """Raised when a partial update carries no allow-listed field"""
    def __init__(self):
        super().__init__(400, "No fields to update")


class UnknownFieldsError(ServiceError):
    """Raised in strict allow-list mode when the body has unknown keys"""
    def __init__(self, fields: Iterable[str]):
        super().__init__(400, f"Unknown fields: {', '.join(sorted(fields))}")


class InvalidFieldValueError(ServiceError):
    def __init__(self, reason: str):
        super().__init__(400, "Invalid field value", details=reason)


class StoreFailureError(ServiceError):
    """
    Raised when the database rejects a statement or the transaction fails.
    Driver messages are only returned when EXPOSE_ERROR_DETAILS is on.
    """
    def __init__(self, error: str, cause: Optional[BaseException] = None):
        details = None
        if cause is not None and settings.expose_error_details:
            details = str(getattr(cause, "orig", None) or cause)
        super().__init__(500, error, details=details)
