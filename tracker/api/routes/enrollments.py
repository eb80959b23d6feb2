from typing import Optional

from fastapi import APIRouter, Depends, Query

from tracker.api.deps import get_gateway
from tracker.schemas.common import SuccessResponse
from tracker.schemas.school_class import (
    BulkEnrollment,
    BulkEnrollResult,
    BulkUnenrollResult,
    EnrollmentKey,
    EnrollmentOut,
    EnrollmentTransfer,
    TransferMode,
    TransferResult,
)
from tracker.services import enrollments
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import ENROLLMENTS

router = APIRouter()


@router.get("/enrollments", response_model=list[EnrollmentOut])
def list_enrollments(
    class_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    gateway: OwnedResourceGateway = Depends(get_gateway),
):
    return gateway.list(ENROLLMENTS, class_id=class_id, student_id=student_id)


@router.post("/enrollments", response_model=EnrollmentOut)
def enroll_student(request: EnrollmentKey, gateway: OwnedResourceGateway = Depends(get_gateway)):
    return gateway.create(ENROLLMENTS, request.model_dump())


@router.delete("/enrollments", response_model=SuccessResponse)
def remove_enrollment(request: EnrollmentKey, gateway: OwnedResourceGateway = Depends(get_gateway)) -> SuccessResponse:
    gateway.delete(ENROLLMENTS, request.model_dump())
    return SuccessResponse()


@router.post("/enrollments/bulk", response_model=BulkEnrollResult)
def bulk_enroll(request: BulkEnrollment, gateway: OwnedResourceGateway = Depends(get_gateway)):
    return enrollments.enroll_many(gateway, request.class_id, request.student_ids)


@router.delete("/enrollments/bulk", response_model=BulkUnenrollResult)
def bulk_unenroll(request: BulkEnrollment, gateway: OwnedResourceGateway = Depends(get_gateway)):
    return enrollments.unenroll_many(gateway, request.class_id, request.student_ids)


@router.post("/enrollments/transfer", response_model=TransferResult)
def transfer_students(request: EnrollmentTransfer, gateway: OwnedResourceGateway = Depends(get_gateway)):
    return enrollments.transfer(
        gateway,
        request.from_class_id,
        request.to_class_id,
        request.student_ids,
        move=request.transfer_type == TransferMode.MOVE,
        reason=request.reason,
    )
