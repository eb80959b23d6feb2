from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class Subject(Base):
    __tablename__ = "subjects"
    __table_args__ = (UniqueConstraint("owner_id", "code", name="uq_subjects_owner_code"),)

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    code = Column(String(10), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    classes = relationship("SchoolClass", back_populates="subject", cascade="all, delete-orphan", passive_deletes=True)
    photos = relationship("SubjectPhoto", back_populates="subject", cascade="all, delete-orphan", passive_deletes=True)
