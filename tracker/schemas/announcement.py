from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from tracker.models import AnnouncementScope


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1)
    body: str = Field(min_length=1)
    scope: AnnouncementScope
    class_id: Optional[str] = None
    published_at: Optional[datetime] = None


class AnnouncementOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    body: str
    scope: AnnouncementScope
    class_id: Optional[str] = None
    published_at: Optional[datetime] = None
    owner_id: str
    created_at: Optional[datetime] = None
