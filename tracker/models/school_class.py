from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class SchoolClass(Base):
    __tablename__ = "classes"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    year_level = Column(Integer, nullable=False)
    subject_id = Column(String(36), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    subject = relationship("Subject", back_populates="classes")
    enrollments = relationship("Enrollment", back_populates="school_class", cascade="all, delete-orphan", passive_deletes=True)
    assessments = relationship("Assessment", back_populates="school_class", cascade="all, delete-orphan", passive_deletes=True)
    announcements = relationship("Announcement", back_populates="school_class", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def subject_name(self):
        return self.subject.name if self.subject else None
