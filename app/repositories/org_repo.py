from sqlalchemy.orm import Session
from sqlalchemy import select, update
from app.models.org_model import Organization
from app.models.enums import OrgStatus


def get_org_by_id(db: Session, org_id: str) -> Organization | None:
    return db.get(Organization, org_id)


def get_org_by_name(db: Session, name: str) -> Organization | None:
    stmt = select(Organization).where(Organization.name == name)
    return db.execute(stmt).scalars().first()


def get_orgs(db: Session, status: OrgStatus | None = None) -> list[Organization]:
    stmt = select(Organization)
    if status:
        stmt = stmt.where(Organization.status == status)
    stmt = stmt.order_by(Organization.created_at.desc())
    return list(db.execute(stmt).scalars().all())


def create_org(db: Session, **fields) -> Organization:
    org = Organization(**fields)
    db.add(org)
    db.commit()
    db.refresh(org)
    return org


def set_org_status(db: Session, org_id: str, status: OrgStatus) -> int:
    result = db.execute(update(Organization).where(Organization.id == org_id).values(status=status))
    db.commit()
    return result.rowcount
