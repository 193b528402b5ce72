from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.models.org_admin_model import OrganizationAdmin


def upsert_org_admin(db: Session, org_id: str, user_id: str) -> bool:
    """Insert the (organization, user) link. Returns False when it already existed."""
    if db.get(OrganizationAdmin, (org_id, user_id)) is not None:
        return False
    db.add(OrganizationAdmin(organization_id=org_id, user_id=user_id))
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent approval; the row is there now.
        db.rollback()
        return False
    return True


def list_org_admins(db: Session, org_id: str) -> list[OrganizationAdmin]:
    return list(db.query(OrganizationAdmin).filter(OrganizationAdmin.organization_id == org_id).all())
