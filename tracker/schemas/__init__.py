from tracker.schemas.auth import LoginRequest, LoginResponse, LoginUser, MeResponse
from tracker.schemas.common import SuccessResponse
from tracker.schemas.subject import SubjectCreate, SubjectUpdate, SubjectOut, SubjectPhotoCreate, SubjectPhotoOut
from tracker.schemas.school_class import (
    ClassCreate,
    ClassUpdate,
    ClassOut,
    EnrollmentKey,
    EnrollmentOut,
    BulkEnrollment,
    BulkEnrollResult,
    BulkUnenrollResult,
    EnrollmentTransfer,
    TransferMode,
    TransferResult,
)
from tracker.schemas.student import StudentCreate, StudentUpdate, StudentOut
from tracker.schemas.assessment import (
    AssessmentCreate,
    AssessmentOut,
    PublishRequest,
    PublishResponse,
    AssessmentTypeCreate,
    AssessmentTypeUpdate,
    AssessmentTypeOut,
    ScoreSave,
    ScoreBatch,
    ScoreBatchResult,
    ScoreOut,
    FinalGrade,
    GradeBucket,
    AnalyticsSummary,
)
from tracker.schemas.grading_period import GradingPeriodOut, SchoolYearOverview, SchoolYearCreated, SetCurrentResponse
from tracker.schemas.announcement import AnnouncementCreate, AnnouncementOut
from tracker.schemas.audit import AuditLogOut

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "MeResponse",
    "SuccessResponse",
    "SubjectCreate",
    "SubjectUpdate",
    "SubjectOut",
    "SubjectPhotoCreate",
    "SubjectPhotoOut",
    "ClassCreate",
    "ClassUpdate",
    "ClassOut",
    "EnrollmentKey",
    "EnrollmentOut",
    "BulkEnrollment",
    "BulkEnrollResult",
    "BulkUnenrollResult",
    "EnrollmentTransfer",
    "TransferMode",
    "TransferResult",
    "StudentCreate",
    "StudentUpdate",
    "StudentOut",
    "AssessmentCreate",
    "AssessmentOut",
    "PublishRequest",
    "PublishResponse",
    "AssessmentTypeCreate",
    "AssessmentTypeUpdate",
    "AssessmentTypeOut",
    "ScoreSave",
    "ScoreBatch",
    "ScoreBatchResult",
    "ScoreOut",
    "FinalGrade",
    "GradeBucket",
    "AnalyticsSummary",
    "GradingPeriodOut",
    "SchoolYearOverview",
    "SchoolYearCreated",
    "SetCurrentResponse",
    "AnnouncementCreate",
    "AnnouncementOut",
    "AuditLogOut",
]
