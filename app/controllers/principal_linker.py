import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import LinkingError
from app.models.enums import UserRole, UserStatus
from app.repositories.org_admin_repo import upsert_org_admin
from app.repositories.user_repo import get_user_by_email, update_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkResult:
    user_id: str | None = None
    linked: bool = False
    admin_row_recorded: bool = False

    @classmethod
    def skipped(cls) -> "LinkResult":
        return cls()


class PrincipalLinker:
    """Promotes the applicant's existing user to org admin of the organization.

    The user's role is overwritten unconditionally: whoever applied for the
    organization becomes its admin, regardless of their previous role.
    """

    def __init__(self, db: Session):
        self.db = db

    def link(self, organization_id: str, applicant_email: str) -> LinkResult:
        user = get_user_by_email(self.db, applicant_email)
        if user is None:
            logger.info("No user registered for %s yet; organization %s approved without admin", applicant_email, organization_id)
            return LinkResult.skipped()

        try:
            update_user(
                self.db,
                user.id,
                status=UserStatus.APPROVED,
                role=UserRole.ORG_ADMIN,
                organization_id=organization_id,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise LinkingError(
                f"Organization approved, but user {applicant_email} could not be linked. Retry the approval."
            ) from exc

        # The users row is authoritative; organization_admins is an index over it.
        try:
            upsert_org_admin(self.db, organization_id, user.id)
            recorded = True
        except SQLAlchemyError:
            self.db.rollback()
            logger.warning(
                "organization_admins row for org %s / user %s not written",
                organization_id,
                user.id,
                exc_info=True,
            )
            recorded = False

        return LinkResult(user_id=user.id, linked=True, admin_row_recorded=recorded)
