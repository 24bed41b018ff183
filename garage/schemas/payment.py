from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime, date
from decimal import Decimal

from garage.schemas.common import blank_to_none


def parse_payment_date(value) -> Optional[datetime]:
    """
    Accept YYYY-MM-DD or an ISO datetime. Anything else (or nothing) yields
    None so the database default (current time) applies.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        return None


class PaymentCreateRequest(BaseModel):
    amount:       Decimal
    method:       Optional[str]      = None
    notes:        Optional[str]      = None
    payment_date: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v):
        if not v.is_finite():
            raise ValueError("Invalid amount")
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v

    @field_validator("method", "notes", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("payment_date", mode="before")
    @classmethod
    def lenient_date(cls, v):
        return parse_payment_date(v)
