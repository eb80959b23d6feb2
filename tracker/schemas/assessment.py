from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tracker.schemas.common import reject_null

from tracker.models import AssessmentKind, AssessmentStatus


class AssessmentCreate(BaseModel):
    class_id: str
    title: str = Field(min_length=1)
    type: AssessmentKind
    date: date
    max_score: float = Field(gt=0)
    weight: float = Field(default=1, ge=0)
    assessment_type_id: Optional[str] = None


class AssessmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    class_id: str
    class_name: Optional[str] = None
    title: str
    type: AssessmentKind
    date: date
    weight: float
    max_score: float
    status: AssessmentStatus
    assessment_type_id: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None


class PublishRequest(BaseModel):
    status: AssessmentStatus


class PublishResponse(BaseModel):
    success: bool = True
    status: AssessmentStatus


class AssessmentTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    percentage_weight: float = Field(ge=0.01, le=100)
    is_active: bool = True
    grading_period_id: Optional[str] = None


class AssessmentTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    percentage_weight: Optional[float] = Field(default=None, ge=0.01, le=100)
    is_active: Optional[bool] = None
    grading_period_id: Optional[str] = None

    @field_validator("name", "percentage_weight", "is_active")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class AssessmentTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    percentage_weight: float
    is_active: bool
    is_default: bool
    grading_period_id: Optional[str] = None
    owner_id: str
    created_at: Optional[datetime] = None


class ScoreSave(BaseModel):
    assessment_id: str
    student_id: str
    raw_score: Optional[float] = Field(default=None, ge=0)
    comment: Optional[str] = None


class ScoreBatch(BaseModel):
    scores: List[ScoreSave] = Field(min_length=1)


class ScoreOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    assessment_id: str
    student_id: str
    raw_score: Optional[float] = None
    comment: Optional[str] = None
    last_updated_by: str
    owner_id: str
    updated_at: Optional[datetime] = None


class GradeBucket(BaseModel):
    grade: str
    count: int
    percentage: float


class AnalyticsSummary(BaseModel):
    total_subjects: int
    total_classes: int
    total_students: int
    total_assessments: int
    total_scores: int
    average_percentage: float
    students_per_year_level: dict[int, int]
    grade_distribution: List[GradeBucket]


class ScoreBatchResult(BaseModel):
    success: bool = True
    updated: int
    scores: List[ScoreOut]


class ScoredAssessment(BaseModel):
    title: str
    score: float
    max_score: float
    percentage: float


class TypeBreakdown(BaseModel):
    average: float
    weight: float
    weighted_score: float
    assessment_count: int
    assessments: List[ScoredAssessment]


class FinalGradeStudent(BaseModel):
    id: str
    name: str
    family_name: str
    first_name: str


class FinalGradeClass(BaseModel):
    id: str
    name: str


class FinalGrade(BaseModel):
    student: FinalGradeStudent
    school_class: FinalGradeClass = Field(serialization_alias="class")
    final_grade: Optional[float] = None
    letter_grade: Optional[str] = None
    total_weight_used: float = 0
    breakdown: Dict[str, TypeBreakdown] = {}
    calculation_valid: bool = False
    message: Optional[str] = None
