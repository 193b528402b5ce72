from sqlalchemy.orm import Session

from app.controllers.org_matching import NameMatchStrategy, OrganizationMatchStrategy
from app.core.errors import NoApplicationRecordError, NotFoundError, ValidationError
from app.models.org_application_model import Application
from app.repositories.org_application_repo import get_application_by_id
from app.repositories.org_repo import get_org_by_id


class ApplicationResolver:
    """Finds the application an approval acts on. Read-only."""

    def __init__(self, db: Session, matcher: OrganizationMatchStrategy | None = None):
        self.db = db
        self.matcher = matcher or NameMatchStrategy()

    def resolve(self, application_id: str | None = None, organization_id: str | None = None) -> Application:
        if application_id:
            application = get_application_by_id(self.db, application_id)
            if application is None:
                raise NotFoundError("Application not found")
            return application

        if organization_id:
            return self.resolve_for_organization(organization_id)

        raise ValidationError("Application ID or Org ID is required")

    def resolve_for_organization(self, organization_id: str) -> Application:
        """Latest application for the organization, whatever its status.

        Rejected applications are returned too so an admin can re-activate them.
        """
        org = get_org_by_id(self.db, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")

        application = self.matcher.latest_application_for(self.db, org)
        if application is None:
            raise NoApplicationRecordError("No application record found for this organization.")
        return application
