from pydantic import BaseModel, field_validator
from typing import Optional

from garage.schemas.common import required_text, blank_to_none


class ServiceWriteRequest(BaseModel):
    name:      str
    category:  Optional[str] = None
    worker_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return required_text(v, "Name")

    @field_validator("category", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)


class AssignWorkerRequest(BaseModel):
    worker_id: int
