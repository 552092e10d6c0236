"""
Custom Exceptions for the Hotel Booking Backend

This module defines the exception hierarchy raised by services and mapped
to HTTP responses at the API boundary. Every exception carries a stable
message key so the boundary can render a localized message.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    DATABASE_ERROR = "DATABASE_ERROR"


class MessageKey(str, Enum):
    """Stable keys the boundary layer maps to localized messages"""
    NO_BOOKINGS_FOUND = "booking.list.not_found"
    BOOKING_NOT_FOUND = "booking.not_found"
    USER_NOT_FOUND = "user.not_found"
    HOTEL_NOT_FOUND = "hotel.not_found"
    NO_HOTELS_FOUND = "hotel.list.not_found"
    ROOM_TYPE_NOT_FOUND = "room_type.not_found"
    USER_DOES_NOT_HAVE_PERMISSION_TO_VIEW_BOOKINGS = "booking.view.permission_denied"
    USER_DOES_NOT_HAVE_PERMISSION_TO_CHANGE_STATUS = "booking.status.permission_denied"
    USER_CANNOT_CHANGE_STATUS_TO = "booking.status.cannot_change_to"
    USER_DOES_NOT_HAVE_PERMISSION_TO_UPDATE_HOTEL = "hotel.status.permission_denied"
    USER_DOES_NOT_HAVE_PERMISSION_TO_CREATE_HOTEL = "hotel.create.permission_denied"
    USER_DOES_NOT_HAVE_PERMISSION_TO_EDIT_HOTEL = "hotel.update.permission_denied"
    INVALID_DATE_RANGE = "booking.dates.invalid_range"
    VALIDATION_FAILED = "validation.failed"
    AUTHENTICATION_FAILED = "auth.failed"
    TOKEN_EXPIRED = "auth.token.expired"
    TOKEN_INVALID = "auth.token.invalid"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        message_key: Optional[MessageKey] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.message_key = message_key
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "message_key": self.message_key.value if self.message_key else None,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


class NotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message_key: Optional[MessageKey] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": str(resource_id) if resource_id is not None else None
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, message_key, details, 404)
        self.resource_type = resource_type
        self.resource_id = resource_id


class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        message_key: MessageKey = MessageKey.VALIDATION_FAILED,
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, message_key, details, 422)


class AuthenticationError(BaseAppException):
    """Exception raised when authentication fails"""

    def __init__(
        self,
        message: str = "Authentication failed",
        error_code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        message_key: MessageKey = MessageKey.AUTHENTICATION_FAILED,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, error_code, message_key, details, 401)


class TokenExpiredError(AuthenticationError):
    """Exception raised when a token has expired"""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, ErrorCode.TOKEN_EXPIRED, MessageKey.TOKEN_EXPIRED)


class InvalidTokenError(AuthenticationError):
    """Exception raised when token is invalid"""

    def __init__(self, message: str = "Invalid token", reason: Optional[str] = None):
        details = {"reason": reason} if reason else None
        super().__init__(message, ErrorCode.TOKEN_INVALID, MessageKey.TOKEN_INVALID, details)


class PermissionDeniedError(BaseAppException):
    """Exception raised when the caller's role does not permit the action"""

    def __init__(
        self,
        message_key: MessageKey,
        message: str = "Permission denied",
        role: Optional[str] = None,
        target: Optional[str] = None,
    ):
        details = {"role": role}
        if target is not None:
            details["target"] = target
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, message_key, details, 403)
        self.role = role
        self.target = target


class RepositoryError(BaseAppException):
    """Exception raised when a persistence operation fails"""

    def __init__(self, message: str = "Database operation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DATABASE_ERROR, None, details, 500)


__all__ = [
    "ErrorCode",
    "MessageKey",
    "BaseAppException",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "TokenExpiredError",
    "InvalidTokenError",
    "PermissionDeniedError",
    "RepositoryError",
]
