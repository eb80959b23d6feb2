from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class Student(Base):
    __tablename__ = "students"
    __table_args__ = (UniqueConstraint("owner_id", "external_id", name="uq_students_owner_external_id"),)

    id = Column(String(36), primary_key=True, default=new_id)
    family_name = Column(String, nullable=False)
    first_name = Column(String, nullable=False)
    middle_name = Column(String, nullable=True)
    year_level = Column(Integer, nullable=False)
    external_id = Column(String, nullable=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    enrollments = relationship("Enrollment", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)
    scores = relationship("Score", back_populates="student", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def display_name(self) -> str:
        name = f"{self.family_name}, {self.first_name}"
        if self.middle_name:
            name = f"{name} {self.middle_name}"
        return name
