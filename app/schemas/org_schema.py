from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from app.models.enums import OrgStatus, OrgType


class OrgRead(BaseModel):
    id: str
    name: str
    org_type: Optional[OrgType] = None
    country: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    status: OrgStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
