from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional

from garage.schemas.common import required_text, blank_to_none


class WorkerWriteRequest(BaseModel):
    name:      str
    job_title: Optional[str]      = None
    phone:     Optional[str]      = None
    email:     Optional[EmailStr] = None

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return required_text(v, "Name")

    @field_validator("job_title", "phone", "email", mode="before")
    @classmethod
    def empty_as_none(cls, v):
        return blank_to_none(v)
