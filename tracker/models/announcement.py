import enum
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class AnnouncementScope(str, enum.Enum):
    SCHOOL = "SCHOOL"
    CLASS = "CLASS"


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String(36), primary_key=True, default=new_id)
    scope = Column(Enum(AnnouncementScope, name="announcement_scope"), nullable=False)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False)
    published_at = Column(DateTime, nullable=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    school_class = relationship("SchoolClass", back_populates="announcements")
