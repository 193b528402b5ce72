from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey
from sqlalchemy.sql import func
from app.models.base import Base


class OrganizationAdmin(Base):
    __tablename__ = "organization_admins"

    organization_id = Column(Text, ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(Text, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
