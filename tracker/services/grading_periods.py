"""School years and their grading periods.

A school year ("2026-2027") is split into four quarters. Each quarter owns its
own set of assessment types, whose active weights are capped at 100% per
quarter. Exactly one quarter per school year may be marked current.
"""

from datetime import date
import logging
from typing import Dict, List, Optional

from tracker.core.config import get_settings
from tracker.core.errors import InvalidRequest
from tracker.models import AssessmentType, GradingPeriod
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import ASSESSMENT_TYPES, GRADING_PERIODS

logger = logging.getLogger(__name__)

PERIOD_NAMES = ("First Quarter", "Second Quarter", "Third Quarter", "Fourth Quarter")

DEFAULT_ASSESSMENT_TYPES = (
    ("Quiz", 30.0),
    ("Assignment", 40.0),
    ("Exam", 30.0),
)


def school_year_for(day: date, start_month: Optional[int] = None) -> str:
    start_month = start_month or get_settings().school_year_start_month
    first = day.year if day.month >= start_month else day.year - 1
    return f"{first}-{first + 1}"


def next_school_year(day: date, start_month: Optional[int] = None) -> str:
    first = int(school_year_for(day, start_month).split("-")[0]) + 1
    return f"{first}-{first + 1}"


def overview(gateway: OwnedResourceGateway, school_year: str) -> Dict:
    periods = gateway.list(GRADING_PERIODS, school_year=school_year)
    assessment_types = []
    if periods:
        assessment_types = (
            gateway.scoped(ASSESSMENT_TYPES)
            .filter(AssessmentType.grading_period_id.in_([period.id for period in periods]))
            .order_by(AssessmentType.grading_period_id, AssessmentType.percentage_weight.desc())
            .all()
        )
    return {
        "school_year": school_year,
        "grading_periods": periods,
        "assessment_types": assessment_types,
    }


def set_current(gateway: OwnedResourceGateway, period_id: str) -> GradingPeriod:
    period = gateway.get(GRADING_PERIODS, period_id)
    with gateway.atomic("update", GRADING_PERIODS.entity, GRADING_PERIODS.noun):
        (
            gateway.scoped(GRADING_PERIODS)
            .filter(GradingPeriod.school_year == period.school_year, GradingPeriod.id != period.id)
            .update({"is_current": False}, synchronize_session=False)
        )
        return gateway.update(
            GRADING_PERIODS,
            period.id,
            {"is_current": True},
            annotate=lambda obj, changes: {"action": "set_current"},
        )


def create_school_year(gateway: OwnedResourceGateway, school_year: str) -> List[GradingPeriod]:
    """Create the four quarters of ``school_year``, each with the default assessment types."""
    existing = gateway.scoped(GRADING_PERIODS).filter(GradingPeriod.school_year == school_year).first()
    if existing is not None:
        raise InvalidRequest(f"School year {school_year} already exists")

    periods = []
    with gateway.atomic("create", "school_year", "school year"):
        for number, name in enumerate(PERIOD_NAMES, start=1):
            period = gateway.create(
                GRADING_PERIODS,
                {"name": name, "school_year": school_year, "period_number": number},
            )
            for type_name, weight in DEFAULT_ASSESSMENT_TYPES:
                gateway.create(
                    ASSESSMENT_TYPES,
                    {
                        "name": type_name,
                        "percentage_weight": weight,
                        "is_default": True,
                        "grading_period_id": period.id,
                    },
                )
            periods.append(period)
    logger.info("Created school year %s for owner %s", school_year, gateway.owner_id)
    return periods
