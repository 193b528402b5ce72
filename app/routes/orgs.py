from fastapi import APIRouter, Depends, Query
from app.core.errors import NotFoundError
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import require_admin, require_org_admin
from app.models.enums import OrgStatus
from app.controllers.org_controller import list_orgs, get_org
from app.schemas.org_schema import OrgRead

router = APIRouter(prefix="/orgs", tags=["orgs"])


@router.get("", response_model=list[OrgRead])
def list_orgs_route(
    org_status: OrgStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    _admin=Depends(require_admin),
):
    return list_orgs(db, status=org_status)


@router.get("/me", response_model=OrgRead)
def get_my_org_route(
    db: Session = Depends(get_db),
    user=Depends(require_org_admin),
):
    if not user.organization_id:
        raise NotFoundError("Organization not found")
    return get_org(db, user.organization_id)


@router.get("/{org_id}", response_model=OrgRead)
def get_org_route(
    org_id: str,
    db: Session = Depends(get_db),
    _admin=Depends(require_admin),
):
    return get_org(db, org_id)
