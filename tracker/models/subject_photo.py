from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class SubjectPhoto(Base):
    __tablename__ = "subject_photos"

    id = Column(String(36), primary_key=True, default=new_id)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    photo_url = Column(String, nullable=False)
    caption = Column(String, nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="photos")

    @property
    def subject_name(self):
        return self.subject.name if self.subject else None
