from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import select, update, func
from app.models.org_application_model import Application
from app.models.enums import ApplicationStatus, ApplicationType


def _next_seq(db: Session) -> int:
    current = db.execute(select(func.max(Application.seq))).scalar()
    return (current or 0) + 1


def create_application(db: Session, **fields) -> Application:
    app = Application(seq=_next_seq(db), **fields)
    db.add(app)
    db.commit()
    db.refresh(app)
    return app


def get_application_by_id(db: Session, application_id: str) -> Application | None:
    return db.get(Application, application_id)


def get_latest_application_by_org_name(
    db: Session,
    org_name: str,
    status: ApplicationStatus | None = None,
) -> Application | None:
    stmt = (
        select(Application)
        .where(Application.application_type == ApplicationType.ORGANIZATION)
        .where(Application.organization_name == org_name)
    )
    if status:
        stmt = stmt.where(Application.status == status)
    stmt = stmt.order_by(Application.created_at.desc(), Application.seq.desc()).limit(1)
    return db.execute(stmt).scalars().first()


def list_applications(db: Session, status: ApplicationStatus | None = None) -> list[Application]:
    stmt = select(Application)
    if status:
        stmt = stmt.where(Application.status == status)
    stmt = stmt.order_by(Application.created_at.desc(), Application.seq.desc())
    return list(db.execute(stmt).scalars().all())


def set_application_status(
    db: Session,
    application_id: str,
    status: ApplicationStatus,
    reviewed_by: str | None = None,
    unless_status: ApplicationStatus | None = None,
) -> int:
    """Returns the number of rows changed. With ``unless_status``, rows already in that status are left alone."""
    values = {"status": status, "reviewed_by": reviewed_by}
    if status in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
        values["reviewed_at"] = datetime.now(timezone.utc)
    stmt = update(Application).where(Application.id == application_id)
    if unless_status is not None:
        stmt = stmt.where(Application.status != unless_status)
    result = db.execute(stmt.values(**values))
    db.commit()
    return result.rowcount
