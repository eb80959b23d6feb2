from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.schemas.common import reject_null


class SubjectCreate(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=10)


class SubjectUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1, max_length=10)

    @field_validator("name", "code")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class SubjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    owner_id: str
    created_at: Optional[datetime] = None


class SubjectPhotoCreate(BaseModel):
    subject_id: str
    photo_url: str = Field(min_length=1)
    caption: Optional[str] = None
    display_order: int = 0


class SubjectPhotoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    subject_id: str
    subject_name: Optional[str] = None
    photo_url: str
    caption: Optional[str] = None
    display_order: int
    owner_id: str
    created_at: Optional[datetime] = None
