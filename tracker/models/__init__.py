from tracker.models.user import User, UserRole
from tracker.models.subject import Subject
from tracker.models.school_class import SchoolClass
from tracker.models.student import Student
from tracker.models.enrollment import Enrollment
from tracker.models.grading_period import GradingPeriod
from tracker.models.assessment import Assessment, AssessmentKind, AssessmentStatus, AssessmentType, Score
from tracker.models.announcement import Announcement, AnnouncementScope
from tracker.models.subject_photo import SubjectPhoto
from tracker.models.audit_log import AuditLogEntry

__all__ = [
    "User",
    "UserRole",
    "Subject",
    "SchoolClass",
    "Student",
    "Enrollment",
    "GradingPeriod",
    "Assessment",
    "AssessmentKind",
    "AssessmentStatus",
    "AssessmentType",
    "Score",
    "Announcement",
    "AnnouncementScope",
    "SubjectPhoto",
    "AuditLogEntry",
]
