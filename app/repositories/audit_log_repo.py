from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.audit_log_model import AuditLog


def create_audit_log(
    db: Session,
    action: str,
    target_resource: str | None,
    actor_id: str | None,
    details: dict,
) -> AuditLog:
    entry = AuditLog(action=action, target_resource=target_resource, actor_id=actor_id, details=details)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def list_audit_logs(db: Session, limit: int = 100, action: str | None = None) -> list[AuditLog]:
    stmt = select(AuditLog)
    if action:
        stmt = stmt.where(AuditLog.action == action)
    stmt = stmt.order_by(AuditLog.timestamp.desc()).limit(limit)
    return list(db.execute(stmt).scalars().all())
