import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.enums import ApplicationStatus, ApplicationType, AuditAction, OrgStatus
from app.schemas.org_application_schema import OrgApplicationCreate
from app.repositories.org_application_repo import (
    create_application,
    get_application_by_id,
    list_applications as list_application_rows,
    set_application_status,
)
from app.repositories.org_repo import create_org, get_org_by_name
from app.controllers.audit_controller import record_audit
from app.core.email import send_email_best_effort
from app.core.errors import AuditWriteFailure, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _send_submission_email(to_email: str, org_name: str):
    subject = "ERNAM: Partnership Application Received"
    html = f"""
    <div style="font-family: Arial, sans-serif; line-height: 1.6;">
      <h2>Application received</h2>
      <p>Hello,</p>
      <p>We have received the partnership application for {org_name}. Our team will review it and get back to you soon.</p>
      <p>Thank you,<br/>ERNAM Team</p>
    </div>
    """
    send_email_best_effort(to_email, subject, html)


def _ensure_org_shell(db: Session, data: OrgApplicationCreate):
    org = get_org_by_name(db, data.organization_name)
    if org:
        return org
    try:
        return create_org(
            db,
            name=data.organization_name,
            org_type=data.org_type,
            country=data.country,
            contact_email=data.applicant_email,
            contact_phone=data.applicant_phone,
            status=OrgStatus.PENDING,
        )
    except IntegrityError:
        # Another submission created the same name in between.
        db.rollback()
        return get_org_by_name(db, data.organization_name)


def submit_application(db: Session, data: OrgApplicationCreate):
    org = _ensure_org_shell(db, data)
    app = create_application(
        db,
        application_type=ApplicationType.ORGANIZATION,
        organization_name=data.organization_name,
        applicant_name=data.applicant_name,
        applicant_email=data.applicant_email,
        applicant_phone=data.applicant_phone,
        status=ApplicationStatus.PENDING,
        details={
            "organization_id": org.id if org else None,
            "message": data.message,
            "org_type": data.org_type.value,
        },
    )
    logger.info("Application %s submitted for %s", app.id, data.organization_name)
    _send_submission_email(data.applicant_email, data.organization_name)
    return app


def get_application(db: Session, application_id: str):
    app = get_application_by_id(db, application_id)
    if not app:
        raise NotFoundError("Application not found")
    return app


def list_applications(db: Session, status: ApplicationStatus | None = None):
    return list_application_rows(db, status=status)


def reopen_application(db: Session, application_id: str, reviewer_id: str | None = None):
    """Manual override: rejected -> pending. Approved applications stay approved."""
    app = get_application_by_id(db, application_id)
    if not app:
        raise NotFoundError("Application not found")
    if app.status == ApplicationStatus.APPROVED:
        raise ValidationError("Approved applications cannot be re-opened")
    if app.status == ApplicationStatus.PENDING:
        return app

    set_application_status(db, app.id, ApplicationStatus.PENDING)
    try:
        record_audit(db, AuditAction.APPLICATION_REOPENED, app.id, reviewer_id, {"organization_name": app.organization_name})
    except AuditWriteFailure:
        logger.error("Audit entry for re-opened application %s not written", app.id, exc_info=True)
    db.refresh(app)
    return app
