from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import AuditWriteFailure
from app.models.audit_log_model import AuditLog
from app.models.enums import AuditAction
from app.repositories.audit_log_repo import create_audit_log, list_audit_logs


def record_audit(
    db: Session,
    action: AuditAction,
    target_resource: str | None,
    actor_id: str | None,
    details: dict | None = None,
) -> AuditLog:
    try:
        return create_audit_log(db, action.value, target_resource, actor_id, details or {})
    except SQLAlchemyError as exc:
        db.rollback()
        raise AuditWriteFailure(f"Could not write {action.value} audit entry for {target_resource}") from exc


def list_entries(db: Session, limit: int = 100, action: AuditAction | None = None) -> list[AuditLog]:
    return list_audit_logs(db, limit=limit, action=action.value if action else None)
