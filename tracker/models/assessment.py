import enum
from datetime import datetime

from sqlalchemy import Column, String, Float, Boolean, Date, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class AssessmentKind(str, enum.Enum):
    QUIZ = "QUIZ"
    EXAM = "EXAM"
    ASSIGNMENT = "ASSIGNMENT"


class AssessmentStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class AssessmentType(Base):
    __tablename__ = "assessment_types"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    percentage_weight = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_default = Column(Boolean, nullable=False, default=False)
    grading_period_id = Column(String(36), ForeignKey("grading_periods.id", ondelete="CASCADE"), nullable=True, index=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    grading_period = relationship("GradingPeriod", back_populates="assessment_types")
    assessments = relationship("Assessment", back_populates="assessment_type")


class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(String(36), primary_key=True, default=new_id)
    class_id = Column(String(36), ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True)
    assessment_type_id = Column(String(36), ForeignKey("assessment_types.id"), nullable=True)
    title = Column(String, nullable=False)
    type = Column(Enum(AssessmentKind, name="assessment_kind"), nullable=False)
    date = Column(Date, nullable=False)
    weight = Column(Float, nullable=False, default=1)
    max_score = Column(Float, nullable=False)
    status = Column(Enum(AssessmentStatus, name="assessment_status"), nullable=False, default=AssessmentStatus.DRAFT)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    school_class = relationship("SchoolClass", back_populates="assessments")
    assessment_type = relationship("AssessmentType", back_populates="assessments")
    scores = relationship("Score", back_populates="assessment", cascade="all, delete-orphan", passive_deletes=True)

    @property
    def class_name(self):
        return self.school_class.name if self.school_class else None


class Score(Base):
    __tablename__ = "scores"

    assessment_id = Column(String(36), ForeignKey("assessments.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(String(36), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    raw_score = Column(Float, nullable=True)
    comment = Column(String, nullable=True)
    last_updated_by = Column(String(36), nullable=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assessment = relationship("Assessment", back_populates="scores")
    student = relationship("Student", back_populates="scores")
