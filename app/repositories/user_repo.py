from sqlalchemy.orm import Session
from sqlalchemy import select, update, func
from app.models.user_model import User
from app.models.enums import UserRole, UserStatus


def get_user_by_email(db: Session, email: str) -> User | None:
    # Exact match; applicant emails may contain LIKE wildcards such as "_" and "%".
    stmt = select(User).where(func.lower(User.email) == email.lower())
    return db.execute(stmt).scalars().first()


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def list_org_admin_ids(db: Session, org_id: str) -> list[str]:
    stmt = select(User.id).where(User.organization_id == org_id).where(User.role == UserRole.ORG_ADMIN)
    return list(db.execute(stmt).scalars().all())


def update_user(db: Session, user_id: str, **values) -> int:
    result = db.execute(update(User).where(User.id == user_id).values(**values))
    db.commit()
    return result.rowcount


def suspend_users(db: Session, user_ids: list[str]) -> int:
    if not user_ids:
        return 0
    result = db.execute(update(User).where(User.id.in_(user_ids)).values(status=UserStatus.SUSPENDED))
    db.commit()
    return result.rowcount
