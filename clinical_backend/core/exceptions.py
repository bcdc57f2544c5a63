from typing import Dict, Any, Optional
from datetime import datetime, timezone
from fastapi import status
import logging

logger = logging.getLogger(__name__)


class BaseCustomException(Exception):
    """Base class for custom exceptions"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(BaseCustomException):
    """Caller input violates a required-field or allowed-value constraint"""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code=error_code or "VALIDATION_ERROR"
        )


class NotFoundError(BaseCustomException):
    """Exception for resource not found errors"""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code=error_code or "NOT_FOUND_ERROR"
        )


class PersistenceError(BaseCustomException):
    """Storage backend failed to read or write a record"""

    def __init__(
        self,
        message: str = "Persistence operation failed",
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
            error_code=error_code or "PERSISTENCE_ERROR"
        )


def create_error_response(
    exception: BaseCustomException,
    request_id: Optional[str] = None
) -> Dict[str, Any]:
    """Create standardized error response"""
    response = {
        "error": exception.__class__.__name__.replace("Error", " Error"),
        "message": exception.message,
        "error_code": exception.error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id
    }

    if exception.details:
        response["details"] = exception.details

    return response


def handle_database_error(error: Exception, operation: str = "database operation") -> PersistenceError:
    """Convert a driver/ORM failure into PersistenceError.

    Only exception class names are logged or returned; the error text can
    echo bound row values.
    """
    error_type = type(error).__name__
    driver_error = getattr(error, "orig", None)
    driver_error_type = type(driver_error).__name__ if driver_error is not None else None
    logger.error(f"Database error during {operation}: {error_type} ({driver_error_type})")

    text = str(error).lower()
    error_message = "Database operation failed"
    if "connection" in text:
        error_message = "Database connection failed"
    elif "timeout" in text:
        error_message = "Database operation timed out"
    elif "constraint" in text:
        error_message = "Database constraint violation"

    return PersistenceError(
        message=error_message,
        details={"operation": operation, "error_type": error_type, "driver_error_type": driver_error_type},
        error_code="DATABASE_OPERATION_ERROR"
    )
