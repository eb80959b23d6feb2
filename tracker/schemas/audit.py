from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class AuditLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    action: str
    entity: str
    entity_id: str
    meta: Optional[Dict[str, Any]] = None
    created_at: datetime
