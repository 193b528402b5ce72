import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.controllers.org_matching import NameMatchStrategy, OrganizationMatchStrategy
from app.core.errors import NotFoundError, ProvisioningError
from app.models.enums import OrgStatus
from app.models.org_application_model import Application
from app.models.org_model import Organization
from app.repositories.org_repo import get_org_by_id, set_org_status

logger = logging.getLogger(__name__)


class OrganizationProvisioner:
    def __init__(self, db: Session, matcher: OrganizationMatchStrategy | None = None):
        self.db = db
        self.matcher = matcher or NameMatchStrategy()

    def find_organization(self, application: Application) -> Organization | None:
        """Explicit ``details.organization_id`` first, then the match strategy."""
        org_id = (application.details or {}).get("organization_id")
        if org_id:
            org = get_org_by_id(self.db, str(org_id))
            if org is not None:
                return org
            logger.warning(
                "Application %s links missing organization %s; falling back to name match",
                application.id,
                org_id,
            )
        return self.matcher.organization_for(self.db, application)

    def provision(self, application: Application) -> str:
        org = self.find_organization(application)
        if org is None:
            raise NotFoundError(f"Organization '{application.organization_name}' not found")

        if org.status == OrgStatus.APPROVED:
            logger.info("Organization %s already approved", org.id)
            return org.id

        try:
            set_org_status(self.db, org.id, OrgStatus.APPROVED)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise ProvisioningError(f"Failed to approve organization '{org.name}'") from exc

        logger.info("Organization %s (%s) approved", org.id, org.name)
        return org.id
