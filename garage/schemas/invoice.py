from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal


class InvoiceServiceLine(BaseModel):
    id:          int
    description: Optional[str] = None
    unit_price:  Decimal       = Field(Decimal("0"), ge=0)


class InvoicePartLine(BaseModel):
    id:          int
    quantity:    int           = Field(..., ge=1)
    description: Optional[str] = None


class InvoiceCreateRequest(BaseModel):
    vehicle_id:     int
    days_in_garage: int = Field(..., ge=0)
    services:       list[InvoiceServiceLine] = []
    parts:          list[InvoicePartLine]    = []
