from pydantic import BaseModel, ConfigDict
from typing import Optional, Any
from datetime import datetime


class AuditLogRead(BaseModel):
    id: str
    action: str
    target_resource: Optional[str] = None
    actor_id: Optional[str] = None
    details: dict[str, Any]
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)
