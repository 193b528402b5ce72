import uuid
from sqlalchemy import Column, BigInteger, Text, TIMESTAMP, JSON, Enum as SAEnum
from sqlalchemy.sql import func
from app.models.base import Base
from app.models.enums import ApplicationType, ApplicationStatus, enum_values


class Application(Base):
    __tablename__ = "applications"

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    # Insertion order; breaks created_at ties when picking the latest application.
    seq = Column(BigInteger, nullable=False, index=True)
    application_type = Column(
        SAEnum(ApplicationType, name="application_type_enum", values_callable=enum_values),
        nullable=False,
        default=ApplicationType.ORGANIZATION,
    )
    organization_name = Column(Text, index=True)
    applicant_name = Column(Text, nullable=False)
    applicant_email = Column(Text, nullable=False)
    applicant_phone = Column(Text)
    status = Column(
        SAEnum(ApplicationStatus, name="application_status_enum", values_callable=enum_values),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    reviewed_by = Column(Text)
    reviewed_at = Column(TIMESTAMP(timezone=True))
