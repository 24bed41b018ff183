from fastapi import HTTPException, status


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR CODES: machine-readable constants for frontend switch/case
# ═══════════════════════════════════════════════════════════════════════════════
class ErrorCode:
    VALIDATION_ERROR        = "VALIDATION_ERROR"
    NOT_FOUND               = "NOT_FOUND"
    DUPLICATE_ENTRY         = "DUPLICATE_ENTRY"
    SERVICES_INCOMPLETE     = "SERVICES_INCOMPLETE"
    INVOICE_MISSING         = "INVOICE_MISSING"
    VEHICLE_ALREADY_EXITED  = "VEHICLE_ALREADY_EXITED"
    INVALID_YEAR            = "INVALID_YEAR"
    INTERNAL_SERVER_ERROR   = "INTERNAL_SERVER_ERROR"


# ═══════════════════════════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════════════════════════
class AppException(HTTPException):
    """
    Base exception for all application-level errors.
    Carries a machine-readable error_code for frontend handling.
    """
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str,
        details: list | None = None,
        field: str | None = None,
    ):
        super().__init__(status_code=status_code, detail={
            "message": message,
            "error": {
                "code": error_code,
                "details": details,
                "field": field,
            }
        })


# ═══════════════════════════════════════════════════════════════════════════════
# CONCRETE EXCEPTIONS
# ═══════════════════════════════════════════════════════════════════════════════

class ValidationException(AppException):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, ErrorCode.VALIDATION_ERROR, field=field)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(status.HTTP_404_NOT_FOUND, f"{resource} not found", ErrorCode.NOT_FOUND)


class DuplicateEntryException(AppException):
    def __init__(self, message: str = "Record already exists", field: str | None = None):
        super().__init__(status.HTTP_409_CONFLICT, message, ErrorCode.DUPLICATE_ENTRY, field=field)


class ServicesIncompleteException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "All services must be completed before exiting.",
            ErrorCode.SERVICES_INCOMPLETE,
        )


class InvoiceMissingException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "Invoice must be generated before exiting.",
            ErrorCode.INVOICE_MISSING,
        )


class VehicleAlreadyExitedException(AppException):
    def __init__(self):
        super().__init__(
            status.HTTP_400_BAD_REQUEST,
            "Vehicle has already exited.",
            ErrorCode.VEHICLE_ALREADY_EXITED,
        )


class InvalidYearException(AppException):
    def __init__(self):
        super().__init__(status.HTTP_400_BAD_REQUEST, "Invalid year", ErrorCode.INVALID_YEAR, field="year")
