"""How applications and organizations find each other when no explicit link is stored.

Applications only carry ``organization_name`` until ``details.organization_id`` is
populated everywhere, so matching is isolated here and injected into the resolver
and the provisioner. Swap the strategy to change the join key without touching
the orchestration.
"""

from abc import ABC, abstractmethod

from sqlalchemy.orm import Session

from app.models.enums import ApplicationStatus
from app.models.org_application_model import Application
from app.models.org_model import Organization
from app.repositories.org_application_repo import get_latest_application_by_org_name
from app.repositories.org_repo import get_org_by_name


class OrganizationMatchStrategy(ABC):
    @abstractmethod
    def organization_for(self, db: Session, application: Application) -> Organization | None:
        ...

    @abstractmethod
    def latest_application_for(
        self,
        db: Session,
        organization: Organization,
        status: ApplicationStatus | None = None,
    ) -> Application | None:
        ...


class NameMatchStrategy(OrganizationMatchStrategy):
    """Exact, case-sensitive match on organization name.

    Fragile against renames and spelling drift; names are unique in
    ``organizations`` so at most one organization matches.
    """

    def organization_for(self, db: Session, application: Application) -> Organization | None:
        if not application.organization_name:
            return None
        return get_org_by_name(db, application.organization_name)

    def latest_application_for(
        self,
        db: Session,
        organization: Organization,
        status: ApplicationStatus | None = None,
    ) -> Application | None:
        return get_latest_application_by_org_name(db, organization.name, status=status)
