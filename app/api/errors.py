# app/api/errors.py
"""
Exception handlers mapping application exceptions to JSON responses.

Bodies have the shape ``{"error": {"message", "code", "message_key",
"details", "type"}}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import BaseAppException, ErrorCode
from app.core.logging import get_logger
from app.core.middleware import get_request_id

logger = get_logger(__name__)


async def handle_application_exception(request: Request, exception: BaseAppException) -> JSONResponse:
    log = logger.error if exception.status_code >= 500 else logger.warning
    log(
        f"Application exception: {exception.error_code.value} - {exception.message}",
        extra={
            "error_code": exception.error_code.value,
            "message_key": exception.message_key.value if exception.message_key else None,
            "request_id": get_request_id(request),
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(status_code=exception.status_code, content=exception.to_dict())


async def handle_unexpected_exception(request: Request, exception: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {str(exception)}",
        extra={
            "error_type": type(exception).__name__,
            "request_id": get_request_id(request),
            "path": request.url.path,
            "method": request.method,
        },
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "An unexpected error occurred",
                "code": ErrorCode.INTERNAL_ERROR.value,
                "message_key": None,
                "details": {},
                "type": "InternalError",
            }
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, handle_application_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
