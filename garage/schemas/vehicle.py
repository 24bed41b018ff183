from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from garage.schemas.common import required_text, blank_to_none


class StandalonePartLine(BaseModel):
    part_id:  int
    quantity: int = Field(1, ge=1)


class ServicePartLine(BaseModel):
    service_id: int
    part_id:    int
    quantity:   int = Field(1, ge=1)


# ─── Requests ─────────────────────────────────────────────────────────────────
class VehicleBase(BaseModel):
    plate:          str
    owner:          str
    contact_number: str
    make:           Optional[str] = None
    model_name:     Optional[str] = None
    year:           Optional[int] = None
    vin:            Optional[str] = None

    @field_validator("plate")
    @classmethod
    def check_plate(cls, v):
        return required_text(v, "Plate").upper()

    @field_validator("owner")
    @classmethod
    def check_owner(cls, v):
        return required_text(v, "Owner")

    @field_validator("contact_number")
    @classmethod
    def check_contact(cls, v):
        return required_text(v, "Contact number")

    @field_validator("make", "model_name", "vin", "year", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)

    @field_validator("year")
    @classmethod
    def check_year(cls, v):
        if v is not None and not (1900 <= v <= 2100):
            raise ValueError("Year must be between 1900 and 2100")
        return v


class VehicleCreateRequest(VehicleBase):
    service_ids:      list[int]                = []
    standalone_parts: list[StandalonePartLine] = []
    service_parts:    list[ServicePartLine]    = []


class VehicleUpdateRequest(VehicleBase):
    # Full replace: omitted lists clear the existing associations
    standalone_parts: list[StandalonePartLine] = []
    service_parts:    list[ServicePartLine]    = []


class ServiceStatusRequest(BaseModel):
    status:         str
    completed_time: Optional[datetime] = None

    @field_validator("status")
    @classmethod
    def check_status(cls, v):
        return required_text(v, "Status").lower()

    @field_validator("completed_time", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)
