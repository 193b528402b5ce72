from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class ApprovalRequest(BaseModel):
    # Any client-supplied adminId is ignored; the reviewer comes from the bearer token.
    application_id: Optional[str] = None
    org_id: Optional[str] = None


class ApprovalResponse(BaseModel):
    message: str
    application_id: str = Field(alias="applicationId")
    organization_id: Optional[str] = Field(default=None, alias="organizationId")
    principal_linked: bool = Field(alias="principalLinked")
    already_approved: bool = Field(default=False, alias="alreadyApproved")

    model_config = ConfigDict(populate_by_name=True)


class DeclineRequest(BaseModel):
    org_id: Optional[str] = None


class DeclineResponse(BaseModel):
    message: str
    organization_id: str = Field(alias="organizationId")
    application_id: Optional[str] = Field(default=None, alias="applicationId")
    suspended_users: int = Field(alias="suspendedUsers")

    model_config = ConfigDict(populate_by_name=True)
