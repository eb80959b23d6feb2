from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from tracker.models import AuditLogEntry

CREATE = "CREATE"
UPDATE = "UPDATE"
DELETE = "DELETE"
PUBLISH = "PUBLISH"


def record(
    db: Session,
    user_id: str,
    action: str,
    entity: str,
    entity_id: str,
    meta: Optional[Dict[str, Any]] = None,
) -> AuditLogEntry:
    """Stage an audit entry in the caller's transaction; the caller commits."""
    entry = AuditLogEntry(
        user_id=user_id,
        action=action,
        entity=entity,
        entity_id=str(entity_id),
        meta=meta,
        owner_id=user_id,
    )
    db.add(entry)
    return entry


def list_entries(
    db: Session,
    owner_id: str,
    entity: Optional[str] = None,
    entity_id: Optional[str] = None,
    action: Optional[str] = None,
    limit: int = 100,
) -> List[AuditLogEntry]:
    query = db.query(AuditLogEntry).filter(AuditLogEntry.owner_id == owner_id)
    if entity:
        query = query.filter(AuditLogEntry.entity == entity)
    if entity_id:
        query = query.filter(AuditLogEntry.entity_id == entity_id)
    if action:
        query = query.filter(AuditLogEntry.action == action)
    return query.order_by(AuditLogEntry.created_at.desc()).limit(limit).all()
