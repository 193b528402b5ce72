import uuid
from sqlalchemy import Column, Text, TIMESTAMP, Enum as SAEnum
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import OrgStatus, OrgType, enum_values


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(Text, nullable=False, unique=True, index=True)
    org_type = Column(SAEnum(OrgType, name="org_type_enum", values_callable=enum_values), default=OrgType.OTHER)
    country = Column(Text)
    contact_email = Column(Text)
    contact_phone = Column(Text)
    status = Column(
        SAEnum(OrgStatus, name="org_status_enum", values_callable=enum_values),
        nullable=False,
        default=OrgStatus.PENDING,
    )
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
