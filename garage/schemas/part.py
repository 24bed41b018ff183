from pydantic import BaseModel, field_validator
from decimal import Decimal

from garage.schemas.common import required_text


class PartWriteRequest(BaseModel):
    """Body for both create and update: parts are always written in full."""
    name:              str
    part_number:       str
    purchasing_cost:   Decimal
    selling_cost:      Decimal
    quantity_in_stock: int | None = 0

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return required_text(v, "Name")

    @field_validator("part_number")
    @classmethod
    def check_part_number(cls, v):
        return required_text(v, "Part number")

    @field_validator("purchasing_cost", "selling_cost")
    @classmethod
    def check_cost(cls, v):
        if v < 0: raise ValueError("Cost cannot be negative")
        return v

    @field_validator("quantity_in_stock")
    @classmethod
    def check_stock(cls, v):
        if v is None: return 0
        if v < 0: raise ValueError("Quantity in stock cannot be negative")
        return v
