from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from tracker.api.deps import get_gateway
from tracker.schemas.grading_period import SchoolYearCreated, SchoolYearOverview, SetCurrentResponse
from tracker.services import grading_periods
from tracker.services.gateway import OwnedResourceGateway

router = APIRouter()


@router.get("/grading-periods", response_model=SchoolYearOverview)
def list_grading_periods(
    school_year: Optional[str] = Query(None, pattern=r"^\d{4}-\d{4}$"),
    gateway: OwnedResourceGateway = Depends(get_gateway),
):
    return grading_periods.overview(gateway, school_year or grading_periods.school_year_for(date.today()))


@router.post("/grading-periods/create-school-year", response_model=SchoolYearCreated)
def create_school_year(gateway: OwnedResourceGateway = Depends(get_gateway)):
    school_year = grading_periods.next_school_year(date.today())
    periods = grading_periods.create_school_year(gateway, school_year)
    return {
        "message": f"School year {school_year} created successfully",
        "school_year": school_year,
        "grading_periods": periods,
    }


@router.post("/grading-periods/{period_id}/set-current", response_model=SetCurrentResponse)
def set_current_period(period_id: str, gateway: OwnedResourceGateway = Depends(get_gateway)):
    period = grading_periods.set_current(gateway, period_id)
    return {"message": f"{period.name} set as current grading period", "period": period}
