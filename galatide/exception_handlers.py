"""
Global Exception Handlers for Galatide

Error Response Format:
{
    "error": {
        "status_code": 404,
        "error_code": "RESOURCE_ARTICLE_NOT_FOUND",
        "message": "Article 'abyssal-station' not found",
        "type": "Not Found",
        "details": {"resource_type": "Article", "resource_id": "abyssal-station"},
        "path": "/api/articles/by-slug/abyssal-station"
    }
}
"""

import logging
from typing import Any, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from galatide.exceptions import ErrorCode, GalatideError

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    message: str,
    error_code: ErrorCode | None = None,
    details: dict[str, Any] | None = None,
    path: str | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    error_response: dict[str, Any] = {
        "error": {
            "status_code": status_code,
            "message": message,
            "type": get_error_type(status_code),
        }
    }

    if error_code:
        error_response["error"]["error_code"] = error_code.value

    if details:
        error_response["error"]["details"] = details

    if path:
        error_response["error"]["path"] = path

    return JSONResponse(status_code=status_code, content=error_response)


# HTTP status -> (type label, error code) for the statuses this service emits
STATUS_ERRORS: dict[int, tuple[str, ErrorCode]] = {
    400: ("Bad Request", ErrorCode.VALIDATION_FAILED),
    403: ("Forbidden", ErrorCode.AUTH_PERMISSION_DENIED),
    404: ("Not Found", ErrorCode.RESOURCE_NOT_FOUND),
    409: ("Conflict", ErrorCode.VALIDATION_DUPLICATE_RESOURCE),
    422: ("Validation Error", ErrorCode.VALIDATION_FAILED),
    500: ("Internal Server Error", ErrorCode.INTERNAL_ERROR),
    503: ("Service Unavailable", ErrorCode.STORE_UNAVAILABLE),
}


def get_error_type(status_code: int) -> str:
    return STATUS_ERRORS.get(status_code, ("Error", ErrorCode.UNKNOWN_ERROR))[0]


def get_http_error_code(status_code: int) -> ErrorCode:
    """Error code for a framework-raised HTTPException (unknown route, wrong method)."""
    return STATUS_ERRORS.get(status_code, ("Error", ErrorCode.UNKNOWN_ERROR))[1]


async def galatide_exception_handler(request: Request, exc: GalatideError) -> JSONResponse:
    """Render a GalatideError raised by a service or route."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.error_code.value,
            "path": request.url.path,
        },
    )

    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        error_code=exc.error_code,
        details=exc.details if exc.details else None,
        path=request.url.path,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        f"HTTPException: {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    return create_error_response(
        status_code=exc.status_code,
        message=str(exc.detail),
        error_code=get_http_error_code(exc.status_code),
        path=request.url.path,
    )


async def validation_exception_handler(
    request: Request, exc: Union[RequestValidationError, PydanticValidationError]
) -> JSONResponse:
    """Render request body/query validation errors with per-field details."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"] if loc != "body")
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})

    logger.warning(f"Validation error on {request.url.path}", extra={"errors": errors})

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Validation error",
        error_code=ErrorCode.VALIDATION_FAILED,
        details={"validation_errors": errors},
        path=request.url.path,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )

    # Internal details stay in the log
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred. Please try again later.",
        error_code=ErrorCode.INTERNAL_ERROR,
        path=request.url.path,
    )


def register_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(GalatideError, galatide_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.info("Exception handlers registered successfully")
