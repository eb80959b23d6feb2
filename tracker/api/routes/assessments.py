from typing import Optional

from fastapi import APIRouter, Depends, Query

from tracker.api.deps import get_gateway
from tracker.schemas.assessment import (
    PublishRequest,
    PublishResponse,
    ScoreBatch,
    ScoreBatchResult,
    ScoreOut,
    ScoreSave,
)
from tracker.services import audit
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import ASSESSMENTS, SCORES

router = APIRouter()


def _status_change(assessment, changes: dict) -> dict:
    return {"status_change": f"{assessment.status.value} -> {changes['status'].value}"}


@router.patch("/assessments/{assessment_id}/publish", response_model=PublishResponse)
def publish_assessment(
    assessment_id: str,
    request: PublishRequest,
    gateway: OwnedResourceGateway = Depends(get_gateway),
) -> PublishResponse:
    gateway.update(
        ASSESSMENTS,
        assessment_id,
        {"status": request.status},
        action=audit.PUBLISH,
        annotate=_status_change,
    )
    return PublishResponse(status=request.status)


@router.get("/scores", response_model=list[ScoreOut])
def list_scores(
    assessment_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    gateway: OwnedResourceGateway = Depends(get_gateway),
):
    return gateway.list(SCORES, assessment_id=assessment_id, student_id=student_id)


@router.post("/scores", response_model=ScoreOut)
def save_score(request: ScoreSave, gateway: OwnedResourceGateway = Depends(get_gateway)):
    return gateway.upsert(SCORES, request.model_dump())


@router.post("/scores/batch", response_model=ScoreBatchResult)
def save_scores(request: ScoreBatch, gateway: OwnedResourceGateway = Depends(get_gateway)):
    with gateway.atomic("save", SCORES.entity, "scores"):
        saved = [gateway.upsert(SCORES, score.model_dump()) for score in request.scores]
    return {"updated": len(saved), "scores": saved}
