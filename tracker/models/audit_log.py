from datetime import datetime

from sqlalchemy import Column, String, DateTime, ForeignKey, JSON

from tracker.db.base import Base, new_id


class AuditLogEntry(Base):
    """Append-only record of a confirmed mutation.

    ``entity``/``entity_id`` point at the affected row without a foreign key,
    so entries outlive the rows they describe.
    """

    __tablename__ = "audit_log"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    action = Column(String(32), nullable=False)
    entity = Column(String(64), nullable=False)
    entity_id = Column(String(36), nullable=False)
    meta = Column(JSON, nullable=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
