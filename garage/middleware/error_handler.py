import logging
import traceback
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from garage.utils.exceptions import AppException, ErrorCode

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, code: str,
                    details: list | None = None, field: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": {"code": code, "details": details, "field": field},
        },
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Domain errors raised by the services (not found, exit preconditions, ...)."""
    detail = exc.detail
    error = detail.get("error") or {}
    return _error_response(
        exc.status_code,
        detail.get("message", "An error occurred"),
        error.get("code", ErrorCode.INTERNAL_SERVER_ERROR),
        details=error.get("details"),
        field=error.get("field"),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Request body / path validation failures.

    Reported as 400 with one entry per offending field; the first field is
    echoed in error.field and in the message.
    """
    details = []
    for err in exc.errors():
        # ("body", "plate") -> "plate"; ("body", "parts", 0, "quantity") -> "parts.0.quantity"
        loc = err.get("loc") or ()
        field = ".".join(str(part) for part in loc if part != "body") or "unknown"
        details.append({"field": field, "message": err.get("msg", "Invalid value")})

    first_field = details[0]["field"] if details else None
    message = f"Invalid or missing field: {first_field}" if first_field else "Validation error"
    return _error_response(status.HTTP_400_BAD_REQUEST, message, ErrorCode.VALIDATION_ERROR,
                           details=details, field=first_field)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique or foreign-key violations; the driver message stays in the log."""
    logger.warning(f"IntegrityError on {request.method} {request.url.path}: {exc.orig}")
    return _error_response(status.HTTP_409_CONFLICT, "The request conflicts with existing data.",
                           ErrorCode.DUPLICATE_ENTRY)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}\n"
        f"{''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))}"
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error",
                           ErrorCode.INTERNAL_SERVER_ERROR)
