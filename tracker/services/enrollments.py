from typing import Dict, Iterable, List, Optional

from tracker.core.errors import InvalidRequest, NotFound
from tracker.services.gateway import OwnedResourceGateway
from tracker.services.resources import CLASSES, ENROLLMENTS


def _key(class_id: str, student_id: str) -> Dict[str, str]:
    return {"class_id": class_id, "student_id": student_id}


def _unique(student_ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(student_ids))


def enroll_many(gateway: OwnedResourceGateway, class_id: str, student_ids: List[str]) -> Dict[str, int]:
    """Enroll every listed student who is not enrolled yet, all or nothing."""
    gateway.get(CLASSES, class_id)

    enrolled = 0
    with gateway.atomic("create", ENROLLMENTS.entity, ENROLLMENTS.noun):
        for student_id in _unique(student_ids):
            key = _key(class_id, student_id)
            if gateway.find(ENROLLMENTS, key) is not None:
                continue
            gateway.create(ENROLLMENTS, key, extra_meta={"bulk": True})
            enrolled += 1
    return {"enrolled": enrolled, "skipped": len(student_ids) - enrolled}


def unenroll_many(gateway: OwnedResourceGateway, class_id: str, student_ids: List[str]) -> Dict[str, int]:
    gateway.get(CLASSES, class_id)

    removed = 0
    with gateway.atomic("delete", ENROLLMENTS.entity, ENROLLMENTS.noun):
        for student_id in _unique(student_ids):
            key = _key(class_id, student_id)
            if gateway.find(ENROLLMENTS, key) is None:
                continue
            gateway.delete(ENROLLMENTS, key, extra_meta={"bulk": True})
            removed += 1
    return {"unenrolled": removed}


def transfer(
    gateway: OwnedResourceGateway,
    from_class_id: str,
    to_class_id: str,
    student_ids: List[str],
    move: bool,
    reason: Optional[str] = None,
) -> Dict[str, int]:
    """Copy or move enrollments from one class to another.

    Students missing from the source class are ignored; students already in
    the target class are skipped. A move removes the source enrollment in the
    same transaction that creates the target one.
    """
    source = gateway.find(CLASSES, from_class_id)
    target = gateway.find(CLASSES, to_class_id)
    if source is None or target is None:
        raise NotFound("One or both classes not found")
    if source.id == target.id:
        raise InvalidRequest("Source and target class must differ")

    enrolled = [
        student_id
        for student_id in _unique(student_ids)
        if gateway.find(ENROLLMENTS, _key(source.id, student_id)) is not None
    ]
    if not enrolled:
        raise InvalidRequest("No students found in source class")
    pending = [
        student_id
        for student_id in enrolled
        if gateway.find(ENROLLMENTS, _key(target.id, student_id)) is None
    ]

    note = {
        "transfer_type": "move" if move else "copy",
        "from_class": source.name,
        "to_class": target.name,
        "reason": reason,
    }
    with gateway.atomic("update", ENROLLMENTS.entity, ENROLLMENTS.noun):
        for student_id in pending:
            gateway.create(ENROLLMENTS, _key(target.id, student_id), extra_meta=note)
            if move:
                gateway.delete(ENROLLMENTS, _key(source.id, student_id), extra_meta=note)
    return {"transferred": len(pending), "skipped": len(enrolled) - len(pending)}
