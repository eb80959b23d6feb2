"""Per-entity configuration for the owner-scoped gateway.

Each entity type is described once here: which model backs it, how it is
labelled in errors, which fields make up its audit snapshot, which parents
must be owned by the caller, and which checks run before a write or delete.
The gateway itself contains no entity-specific code.
"""

from dataclasses import dataclass
from datetime import date, datetime
import enum
from typing import Any, Callable, Dict, Optional, Tuple, Union

from tracker.core.errors import InvalidRequest, NotFound
from tracker.models import (
    Announcement,
    AnnouncementScope,
    Assessment,
    AssessmentType,
    Enrollment,
    GradingPeriod,
    SchoolClass,
    Score,
    Student,
    Subject,
    SubjectPhoto,
)

# (gateway, values, current) -> None; ``current`` is None on create.
Validator = Callable[[Any, dict, Optional[Any]], None]
DeleteGuard = Callable[[Any, Any], None]
SnapshotField = Union[str, Tuple[str, str]]


def plain(value: Any) -> Any:
    """Reduce a column value to something the JSON audit column can hold."""
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def resolve(obj: Any, path: str) -> Any:
    for part in path.split("."):
        if obj is None:
            return None
        obj = getattr(obj, part)
    return obj


@dataclass(frozen=True)
class ResourceConfig:
    key: str
    model: type
    label: str
    entity: str
    snapshot_fields: Tuple[SnapshotField, ...]
    key_fields: Tuple[str, ...] = ("id",)
    audit_key: str = "id"
    parents: Tuple[Tuple[str, str], ...] = ()
    unique_fields: Tuple[Tuple[str, str], ...] = ()
    order_by: Tuple[str, ...] = ()
    validators: Tuple[Validator, ...] = ()
    delete_guards: Tuple[DeleteGuard, ...] = ()

    @property
    def noun(self) -> str:
        return self.label.lower()

    def not_found(self) -> NotFound:
        return NotFound(f"{self.label} not found")

    def key_values(self, entity_id: Any) -> Dict[str, Any]:
        if isinstance(entity_id, dict):
            return {name: entity_id[name] for name in self.key_fields}
        if len(self.key_fields) != 1:
            raise TypeError(f"{self.key} is keyed by {self.key_fields}, got a scalar id")
        return {self.key_fields[0]: entity_id}

    def audit_id(self, obj: Any) -> str:
        return str(getattr(obj, self.audit_key))

    def snapshot(self, obj: Any) -> Dict[str, Any]:
        meta = {}
        for item in self.snapshot_fields:
            name, path = (item, item) if isinstance(item, str) else item
            meta[name] = plain(resolve(obj, path))
        return meta


def _announcement_scope(gateway, values: dict, current) -> None:
    scope = values.get("scope", current.scope if current is not None else None)
    if scope == AnnouncementScope.SCHOOL:
        values["class_id"] = None
    elif values.get("class_id", current.class_id if current is not None else None) is None:
        raise InvalidRequest("Class is required for class announcements")


def _year_level_locked(gateway, values: dict, current) -> None:
    """Classes and students keep their year level while enrollments link them."""
    if current is None or values.get("year_level", current.year_level) == current.year_level:
        return
    column = Enrollment.class_id if isinstance(current, SchoolClass) else Enrollment.student_id
    if gateway.scoped(ENROLLMENTS).filter(column == current.id).first() is not None:
        raise InvalidRequest("Cannot change year level while enrollments exist")


def _same_period(gateway, values: dict, current):
    period_id = values.get("grading_period_id", current.grading_period_id if current is not None else None)
    query = gateway.scoped(ASSESSMENT_TYPES)
    if period_id is None:
        query = query.filter(AssessmentType.grading_period_id.is_(None))
    else:
        query = query.filter(AssessmentType.grading_period_id == period_id)
    if current is not None:
        query = query.filter(AssessmentType.id != current.id)
    return query


def _assessment_type_name(gateway, values: dict, current) -> None:
    if current is not None and "name" not in values and "grading_period_id" not in values:
        return
    name = values.get("name", current.name if current is not None else None)
    if _same_period(gateway, values, current).filter(AssessmentType.name == name).first() is not None:
        raise InvalidRequest("An assessment type with this name already exists")


def _assessment_type_weight(gateway, values: dict, current) -> None:
    watched = ("percentage_weight", "is_active", "grading_period_id")
    if current is not None and not any(name in values for name in watched):
        return
    weight = values.get("percentage_weight", current.percentage_weight if current is not None else None)
    is_active = values.get("is_active", current.is_active if current is not None else True)
    if not is_active or weight is None:
        return

    others = _same_period(gateway, values, current).filter(AssessmentType.is_active.is_(True))
    total = sum(other.percentage_weight for other in others) + weight
    if total > 100:
        raise InvalidRequest(f"Total percentage would be {total:.1f}%. Maximum is 100%.")


def _assessment_type_unused(gateway, assessment_type) -> None:
    count = (
        gateway.scoped(ASSESSMENTS)
        .filter(Assessment.assessment_type_id == assessment_type.id)
        .count()
    )
    if count:
        raise InvalidRequest(f"Cannot delete assessment type. {count} assessment(s) are using this type.")


def _assessment_type_not_default(gateway, assessment_type) -> None:
    if assessment_type.is_default:
        raise InvalidRequest("Cannot delete default assessment types")


def _enrollment_matches_year_level(gateway, values: dict, current) -> None:
    if current is not None:
        return
    school_class = gateway.find(CLASSES, values["class_id"])
    student = gateway.find(STUDENTS, values["student_id"])
    if school_class is None or student is None:
        raise NotFound("Class or student not found")
    if school_class.year_level != student.year_level:
        raise InvalidRequest("Student year level does not match class year level")
    if gateway.find(ENROLLMENTS, values) is not None:
        raise InvalidRequest("Student is already enrolled in this class")


def _score_within_max(gateway, values: dict, current) -> None:
    assessment = gateway.get(ASSESSMENTS, values["assessment_id"])
    gateway.get(STUDENTS, values["student_id"])
    raw_score = values.get("raw_score")
    if raw_score is not None and raw_score > assessment.max_score:
        raise InvalidRequest(f"Score cannot exceed maximum score of {assessment.max_score:g}")
    values["last_updated_by"] = gateway.owner_id


SUBJECTS = ResourceConfig(
    key="subjects",
    model=Subject,
    label="Subject",
    entity="subject",
    snapshot_fields=("name", "code"),
    unique_fields=(("code", "code"),),
    order_by=("name",),
)

CLASSES = ResourceConfig(
    key="classes",
    model=SchoolClass,
    label="Class",
    entity="class",
    snapshot_fields=("name", ("subject", "subject.name"), "year_level"),
    parents=(("subject_id", "subjects"),),
    order_by=("name",),
    validators=(_year_level_locked,),
)

STUDENTS = ResourceConfig(
    key="students",
    model=Student,
    label="Student",
    entity="student",
    snapshot_fields=(("name", "display_name"), "year_level", "external_id"),
    unique_fields=(("external_id", "ID"),),
    order_by=("family_name", "first_name"),
    validators=(_year_level_locked,),
)

GRADING_PERIODS = ResourceConfig(
    key="grading_periods",
    model=GradingPeriod,
    label="Grading period",
    entity="grading_period",
    snapshot_fields=("name", "school_year", "period_number"),
    order_by=("school_year", "period_number"),
)

ASSESSMENT_TYPES = ResourceConfig(
    key="assessment_types",
    model=AssessmentType,
    label="Assessment type",
    entity="assessment_type",
    snapshot_fields=("name", "percentage_weight", ("grading_period", "grading_period.name")),
    parents=(("grading_period_id", "grading_periods"),),
    order_by=("-is_default", "-percentage_weight", "name"),
    validators=(_assessment_type_name, _assessment_type_weight),
    delete_guards=(_assessment_type_unused, _assessment_type_not_default),
)

ASSESSMENTS = ResourceConfig(
    key="assessments",
    model=Assessment,
    label="Assessment",
    entity="assessment",
    snapshot_fields=("title", "type", ("class_name", "school_class.name"), "max_score"),
    parents=(("class_id", "classes"), ("assessment_type_id", "assessment_types")),
    order_by=("-date",),
)

ANNOUNCEMENTS = ResourceConfig(
    key="announcements",
    model=Announcement,
    label="Announcement",
    entity="announcement",
    snapshot_fields=("title", "scope", "class_id"),
    parents=(("class_id", "classes"),),
    order_by=("-created_at",),
    validators=(_announcement_scope,),
)

SUBJECT_PHOTOS = ResourceConfig(
    key="subject_photos",
    model=SubjectPhoto,
    label="Photo",
    entity="subject_photo",
    snapshot_fields=(("subject_name", "subject.name"), "caption"),
    parents=(("subject_id", "subjects"),),
    order_by=("display_order", "created_at"),
)

ENROLLMENTS = ResourceConfig(
    key="enrollments",
    model=Enrollment,
    label="Enrollment",
    entity="enrollment",
    snapshot_fields=(
        ("class_name", "school_class.name"),
        ("student_name", "student.display_name"),
        "student_id",
    ),
    key_fields=("class_id", "student_id"),
    audit_key="class_id",
    parents=(("class_id", "classes"), ("student_id", "students")),
    order_by=("created_at",),
    validators=(_enrollment_matches_year_level,),
)

SCORES = ResourceConfig(
    key="scores",
    model=Score,
    label="Score",
    entity="score",
    snapshot_fields=(
        ("student_name", "student.display_name"),
        "student_id",
        ("assessment_title", "assessment.title"),
        ("score", "raw_score"),
        "comment",
    ),
    key_fields=("assessment_id", "student_id"),
    audit_key="assessment_id",
    parents=(("assessment_id", "assessments"), ("student_id", "students")),
    order_by=("created_at",),
    validators=(_score_within_max,),
)

REGISTRY: Dict[str, ResourceConfig] = {
    resource.key: resource
    for resource in (
        SUBJECTS,
        CLASSES,
        STUDENTS,
        GRADING_PERIODS,
        ASSESSMENT_TYPES,
        ASSESSMENTS,
        ANNOUNCEMENTS,
        SUBJECT_PHOTOS,
        ENROLLMENTS,
        SCORES,
    )
}


def get_resource(key: str) -> ResourceConfig:
    return REGISTRY[key]
