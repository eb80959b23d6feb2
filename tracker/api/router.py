from fastapi import APIRouter

from tracker.api.routes import assessments, auth, enrollments, grading_periods, reports
from tracker.api.routes.resources import build_resource_router
from tracker.schemas import (
    AnnouncementCreate,
    AnnouncementOut,
    AssessmentCreate,
    AssessmentOut,
    AssessmentTypeCreate,
    AssessmentTypeOut,
    AssessmentTypeUpdate,
    ClassCreate,
    ClassOut,
    ClassUpdate,
    StudentCreate,
    StudentOut,
    StudentUpdate,
    SubjectCreate,
    SubjectOut,
    SubjectPhotoCreate,
    SubjectPhotoOut,
    SubjectUpdate,
)
from tracker.services import resources

# Photos come before subjects so /subjects/photos is not read as a subject id.
RESOURCE_ROUTES = (
    ("/subjects/photos", "Subject photos", resources.SUBJECT_PHOTOS, SubjectPhotoOut, SubjectPhotoCreate, None),
    ("/subjects", "Subjects", resources.SUBJECTS, SubjectOut, SubjectCreate, SubjectUpdate),
    ("/classes", "Classes", resources.CLASSES, ClassOut, ClassCreate, ClassUpdate),
    ("/students", "Students", resources.STUDENTS, StudentOut, StudentCreate, StudentUpdate),
    ("/assessments", "Assessments", resources.ASSESSMENTS, AssessmentOut, AssessmentCreate, None),
    ("/assessment-types", "Assessment types", resources.ASSESSMENT_TYPES, AssessmentTypeOut, AssessmentTypeCreate, AssessmentTypeUpdate),
    ("/announcements", "Announcements", resources.ANNOUNCEMENTS, AnnouncementOut, AnnouncementCreate, None),
)

api_router = APIRouter()
api_router.include_router(auth.router, tags=["Auth"])
api_router.include_router(assessments.router, tags=["Assessments"])
api_router.include_router(enrollments.router, tags=["Enrollments"])
api_router.include_router(reports.router, tags=["Reports"])
api_router.include_router(grading_periods.router, tags=["Grading periods"])

for prefix, tag, resource, out_schema, create_schema, update_schema in RESOURCE_ROUTES:
    api_router.include_router(
        build_resource_router(resource, out_schema, create_schema, update_schema),
        prefix=prefix,
        tags=[tag],
    )
