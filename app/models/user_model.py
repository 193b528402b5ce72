import uuid
from sqlalchemy import Column, Text, TIMESTAMP, Enum as SAEnum, ForeignKey
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import UserRole, UserStatus, enum_values


class User(Base):
    __tablename__ = "users"

    # Same id as the identity provider's principal.
    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(Text, nullable=False, unique=True, index=True)
    full_name = Column(Text)
    role = Column(
        SAEnum(UserRole, name="user_role_enum", values_callable=enum_values),
        nullable=False,
        default=UserRole.PARTICIPANT,
    )
    status = Column(
        SAEnum(UserStatus, name="user_status_enum", values_callable=enum_values),
        nullable=False,
        default=UserStatus.PENDING,
    )
    organization_id = Column(Text, ForeignKey("organizations.id", ondelete="SET NULL"))
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
