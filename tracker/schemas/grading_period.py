from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from tracker.schemas.assessment import AssessmentTypeOut


class GradingPeriodOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    school_year: str
    period_number: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool
    owner_id: str
    created_at: Optional[datetime] = None


class SchoolYearOverview(BaseModel):
    school_year: str
    grading_periods: List[GradingPeriodOut]
    assessment_types: List[AssessmentTypeOut]


class SetCurrentResponse(BaseModel):
    message: str
    period: GradingPeriodOut


class SchoolYearCreated(BaseModel):
    message: str
    school_year: str
    grading_periods: List[GradingPeriodOut]
