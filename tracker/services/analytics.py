from collections import Counter, defaultdict
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session

from tracker.models import Assessment, AssessmentType, SchoolClass, Score, Student, Subject
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.grading import final_letter_grade, letter_grade, score_percentage, weighted_final_grade
from tracker.services.resources import ASSESSMENT_TYPES, ASSESSMENTS, CLASSES, STUDENTS

GRADES = ("A", "B", "C", "D", "F")


def score_percentages(db: Session, owner_id: str) -> List[float]:
    rows = (
        db.query(Score.raw_score, Assessment.max_score)
        .join(Assessment, Score.assessment_id == Assessment.id)
        .filter(Score.owner_id == owner_id, Score.raw_score.isnot(None))
        .all()
    )
    percentages = (score_percentage(raw, max_score) for raw, max_score in rows)
    return [p for p in percentages if p is not None]


def students_per_year_level(db: Session, owner_id: str) -> Dict[int, int]:
    rows = (
        db.query(Student.year_level, func.count(Student.id))
        .filter(Student.owner_id == owner_id)
        .group_by(Student.year_level)
        .order_by(Student.year_level)
        .all()
    )
    return {year_level: count for year_level, count in rows}


def grade_distribution(percentages: List[float]) -> List[Dict]:
    counts = Counter(letter_grade(p) for p in percentages)
    total = len(percentages)

    distribution = []
    for grade in GRADES:
        count = counts.get(grade, 0)
        share = round(count / total * 100, 1) if total else 0.0
        distribution.append({"grade": grade, "count": count, "percentage": share})
    return distribution


def summary(db: Session, owner_id: str) -> Dict:
    def count(model) -> int:
        return db.query(model).filter(model.owner_id == owner_id).count()

    percentages = score_percentages(db, owner_id)
    average = round(sum(percentages) / len(percentages), 1) if percentages else 0.0

    return {
        "total_subjects": count(Subject),
        "total_classes": count(SchoolClass),
        "total_students": count(Student),
        "total_assessments": count(Assessment),
        "total_scores": len(percentages),
        "average_percentage": average,
        "students_per_year_level": students_per_year_level(db, owner_id),
        "grade_distribution": grade_distribution(percentages),
    }


def _type_label(assessment_type: AssessmentType) -> str:
    if assessment_type.grading_period is None:
        return assessment_type.name
    return f"{assessment_type.name} ({assessment_type.grading_period.name})"


def final_grade(gateway: OwnedResourceGateway, class_id: str, student_id: str) -> Dict:
    """Weighted final grade of one student in one class.

    Each active assessment type contributes the average percentage of the
    student's scored assessments of that type, weighted by the type's
    ``percentage_weight``. Types without scores are left out and the result is
    normalised over the weight that remains.
    """
    school_class = gateway.get(CLASSES, class_id)
    student = gateway.get(STUDENTS, student_id)
    result = {
        "student": {
            "id": student.id,
            "name": student.display_name,
            "family_name": student.family_name,
            "first_name": student.first_name,
        },
        "school_class": {"id": school_class.id, "name": school_class.name},
    }

    assessment_types = (
        gateway.scoped(ASSESSMENT_TYPES)
        .filter(AssessmentType.is_active.is_(True))
        .order_by(AssessmentType.percentage_weight.desc(), AssessmentType.name)
        .all()
    )
    if not assessment_types:
        result.update(breakdown={}, message="No active assessment types configured")
        return result

    rows = (
        gateway.scoped(ASSESSMENTS)
        .join(Score, Score.assessment_id == Assessment.id)
        .add_columns(Score.raw_score)
        .filter(
            Assessment.class_id == school_class.id,
            Score.student_id == student.id,
            Score.owner_id == gateway.owner_id,
            Score.raw_score.isnot(None),
        )
        .order_by(Assessment.date)
        .all()
    )
    scored = defaultdict(list)
    for assessment, raw_score in rows:
        scored[assessment.assessment_type_id].append((assessment, raw_score))

    breakdown = {}
    parts = []
    for assessment_type in assessment_types:
        entries = scored.get(assessment_type.id)
        if not entries:
            continue
        percentages = [score_percentage(raw, assessment.max_score) for assessment, raw in entries]
        average = sum(percentages) / len(percentages)
        weight = assessment_type.percentage_weight
        parts.append((average, weight))
        breakdown[_type_label(assessment_type)] = {
            "average": round(average, 2),
            "weight": weight,
            "weighted_score": round(average * weight / 100, 2),
            "assessment_count": len(entries),
            "assessments": [
                {
                    "title": assessment.title,
                    "score": raw,
                    "max_score": assessment.max_score,
                    "percentage": round(percentage, 2),
                }
                for (assessment, raw), percentage in zip(entries, percentages)
            ],
        }

    grade, total_weight = weighted_final_grade(parts)
    result.update(
        final_grade=round(grade, 2),
        letter_grade=final_letter_grade(grade),
        total_weight_used=total_weight,
        breakdown=breakdown,
        calculation_valid=round(total_weight, 2) == 100,
    )
    return result
