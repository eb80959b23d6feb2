from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.schemas.common import reject_null


class StudentCreate(BaseModel):
    family_name: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    middle_name: Optional[str] = None
    year_level: int = Field(ge=1, le=12)
    external_id: Optional[str] = None


class StudentUpdate(BaseModel):
    family_name: Optional[str] = Field(default=None, min_length=1)
    first_name: Optional[str] = Field(default=None, min_length=1)
    middle_name: Optional[str] = None
    year_level: Optional[int] = Field(default=None, ge=1, le=12)
    external_id: Optional[str] = None

    @field_validator("family_name", "first_name", "year_level")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class StudentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    family_name: str
    first_name: str
    middle_name: Optional[str] = None
    display_name: str
    year_level: int
    external_id: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None
