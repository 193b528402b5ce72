from pydantic import BaseModel, ConfigDict
from typing import Optional
from app.models.enums import UserRole, UserStatus


class UserRead(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    role: UserRole
    status: UserStatus
    organization_id: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
