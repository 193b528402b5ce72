from pydantic import BaseModel, EmailStr, ConfigDict
from typing import Optional, Any
from datetime import datetime
from app.models.enums import ApplicationStatus, ApplicationType, OrgType


class OrgApplicationCreate(BaseModel):
    organization_name: str
    applicant_name: str
    applicant_email: EmailStr
    applicant_phone: Optional[str] = None
    country: Optional[str] = None
    org_type: OrgType = OrgType.OTHER
    message: Optional[str] = None


class OrgApplicationRead(BaseModel):
    id: str
    application_type: ApplicationType
    organization_name: Optional[str] = None
    applicant_name: str
    applicant_email: str
    applicant_phone: Optional[str] = None
    status: ApplicationStatus
    details: dict[str, Any]
    created_at: datetime
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
