from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tracker.db.base import Base


class Enrollment(Base):
    __tablename__ = "enrollments"

    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    school_class = relationship("SchoolClass", back_populates="enrollments")
    student = relationship("Student", back_populates="enrollments")
