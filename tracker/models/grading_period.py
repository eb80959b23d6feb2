from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from tracker.db.base import Base, new_id


class GradingPeriod(Base):
    __tablename__ = "grading_periods"
    __table_args__ = (
        UniqueConstraint("owner_id", "school_year", "period_number", name="uq_grading_periods_owner_year_number"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(50), nullable=False)
    school_year = Column(String(9), nullable=False, index=True)  # "2026-2027"
    period_number = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, nullable=False, default=False)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    assessment_types = relationship(
        "AssessmentType",
        back_populates="grading_period",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
