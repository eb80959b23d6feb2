from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tracker.api.deps import get_db, get_current_user, get_gateway
from tracker.core.config import get_settings
from tracker.models import User
from tracker.schemas.assessment import AnalyticsSummary, FinalGrade
from tracker.schemas.audit import AuditLogOut
from tracker.services import analytics, audit
from tracker.services.gateway import OwnedResourceGateway

router = APIRouter()


@router.get("/audit-log", response_model=list[AuditLogOut])
def audit_log(
    entity: Optional[str] = Query(None),
    entity_id: Optional[str] = Query(None),
    action: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return audit.list_entries(
        db,
        current_user.id,
        entity=entity,
        entity_id=entity_id,
        action=action,
        limit=limit or get_settings().audit_log_page_size,
    )


@router.get("/analytics", response_model=AnalyticsSummary)
def analytics_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return analytics.summary(db, current_user.id)


@router.get("/classes/{class_id}/students/{student_id}/final-grade", response_model=FinalGrade)
def student_final_grade(
    class_id: str,
    student_id: str,
    gateway: OwnedResourceGateway = Depends(get_gateway),
):
    return analytics.final_grade(gateway, class_id, student_id)
