from sqlalchemy.orm import Session
from app.core.errors import NotFoundError
from app.models.enums import OrgStatus
from app.repositories.org_repo import get_org_by_id, get_orgs


def list_orgs(db: Session, status: OrgStatus | None = None):
    return get_orgs(db, status=status)


def get_org(db: Session, org_id: str):
    org = get_org_by_id(db, org_id)
    if not org:
        raise NotFoundError("Organization not found")
    return org
