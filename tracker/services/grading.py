from typing import Iterable, Optional, Tuple

GRADE_BOUNDARIES = (
    ("A", 90.0),
    ("B", 80.0),
    ("C", 70.0),
    ("D", 60.0),
)


def score_percentage(raw_score: Optional[float], max_score: float) -> Optional[float]:
    if raw_score is None or not max_score:
        return None
    return raw_score / max_score * 100


def letter_grade(percentage: float) -> str:
    for grade, threshold in GRADE_BOUNDARIES:
        if percentage >= threshold:
            return grade
    return "F"


FINAL_GRADE_BANDS = (
    ("A+", 97.0),
    ("A", 93.0),
    ("A-", 90.0),
    ("B+", 87.0),
    ("B", 83.0),
    ("B-", 80.0),
    ("C+", 77.0),
    ("C", 73.0),
    ("C-", 70.0),
    ("D+", 67.0),
    ("D", 65.0),
)


def final_letter_grade(percentage: float) -> str:
    for grade, threshold in FINAL_GRADE_BANDS:
        if percentage >= threshold:
            return grade
    return "F"


def weighted_final_grade(parts: Iterable[Tuple[float, float]]) -> Tuple[float, float]:
    """Combine (average percentage, type weight) pairs into a final grade.

    Only the types passed in count, so the result is normalised over the weight
    that actually has scores. Returns ``(final_grade, total_weight_used)``.
    """
    weighted_total = 0.0
    total_weight = 0.0
    for average, weight in parts:
        weighted_total += average * weight / 100
        total_weight += weight
    if not total_weight:
        return 0.0, 0.0
    return weighted_total * 100 / total_weight, total_weight
