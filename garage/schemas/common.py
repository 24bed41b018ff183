from pydantic import BaseModel
from typing import Any


# ─── Error Detail (per field) ──────────────────────────────────────────────────
class ErrorDetail(BaseModel):
    field: str
    message: str


# ─── Error Body ───────────────────────────────────────────────────────────────
class ErrorBody(BaseModel):
    code: str
    details: list[ErrorDetail] | None = None
    field: str | None = None


# ─── Error Response ───────────────────────────────────────────────────────────
class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: ErrorBody


# ─── Helper Functions ─────────────────────────────────────────────────────────
def success_response(message: str, data: Any = None) -> dict:
    """Return a standardized success dict (used in route handlers)."""
    return {"success": True, "message": message, "data": data}


def required_text(value: str, label: str) -> str:
    """Shared field check: strip and reject blank strings."""
    if not value or not value.strip():
        raise ValueError(f"{label} is required")
    return value.strip()


def blank_to_none(value):
    """Treat empty strings from HTML forms as absent values."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
