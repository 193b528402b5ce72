import uuid
from sqlalchemy import Column, Text, TIMESTAMP, JSON
from sqlalchemy.sql import func
from app.models.base import Base


class AuditLog(Base):
    """Append-only record of a privileged action."""

    __tablename__ = "audit_logs"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    action = Column(Text, nullable=False, index=True)
    target_resource = Column(Text)
    actor_id = Column(Text)
    details = Column(JSON, nullable=False, default=dict)
    timestamp = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), index=True)
