import enum
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.schemas.common import reject_null


class ClassCreate(BaseModel):
    name: str = Field(min_length=1)
    subject_id: str
    year_level: int = Field(ge=1, le=12)


class ClassUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    subject_id: Optional[str] = None
    year_level: Optional[int] = Field(default=None, ge=1, le=12)

    @field_validator("name", "subject_id", "year_level")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class ClassOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    year_level: int
    subject_id: str
    subject_name: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None


class EnrollmentKey(BaseModel):
    class_id: str
    student_id: str


class EnrollmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    class_id: str
    student_id: str
    owner_id: str
    created_at: Optional[datetime] = None


class BulkEnrollment(BaseModel):
    class_id: str
    student_ids: List[str] = Field(min_length=1)


class BulkEnrollResult(BaseModel):
    enrolled: int
    skipped: int


class BulkUnenrollResult(BaseModel):
    unenrolled: int


class TransferMode(str, enum.Enum):
    MOVE = "move"
    COPY = "copy"


class EnrollmentTransfer(BaseModel):
    from_class_id: str
    to_class_id: str
    student_ids: List[str] = Field(min_length=1)
    transfer_type: TransferMode
    reason: Optional[str] = None


class TransferResult(BaseModel):
    transferred: int
    skipped: int
