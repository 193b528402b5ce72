"""Approval and decline of partner organizations.

The store only guarantees single-row atomicity, so approval runs as a saga of
idempotent steps ordered from most to least authoritative:

1. resolve the application (read-only)
2. return early if it is already approved
3. approve the organization
4. promote and link the applicant's user
5. mark the application approved
6. write the audit entry (best-effort)

A failure after step 3 leaves the organization approved. Nothing is rolled back
or retried automatically; re-running ``approve`` on the same application skips
whatever already converged and finishes the rest.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.controllers.application_resolver import ApplicationResolver
from app.controllers.audit_controller import record_audit
from app.controllers.org_matching import NameMatchStrategy, OrganizationMatchStrategy
from app.controllers.org_provisioner import OrganizationProvisioner
from app.controllers.principal_linker import PrincipalLinker
from app.core.config import get_settings
from app.core.email import send_email_best_effort
from app.core.errors import (
    AuditWriteFailure,
    LinkingError,
    NotFoundError,
    ProvisioningError,
    ValidationError,
)
from app.models.enums import ApplicationStatus, ApplicationType, AuditAction, OrgStatus, UserRole
from app.models.org_application_model import Application
from app.repositories.org_application_repo import set_application_status
from app.repositories.org_repo import get_org_by_id, set_org_status
from app.repositories.user_repo import get_user_by_email, list_org_admin_ids, suspend_users

logger = logging.getLogger(__name__)


@dataclass
class ApprovalSummary:
    message: str
    application_id: str
    organization_id: str | None
    principal_linked: bool
    already_approved: bool = False


@dataclass
class DeclineSummary:
    message: str
    organization_id: str
    application_id: str | None
    suspended_users: int


def _send_approval_email(to_email: str, org_name: str):
    login_url = f"{get_settings().frontend_base_url}/auth/login"
    subject = "ERNAM: Your Organization Has Been Approved"
    html = f"""
    <div style="font-family: Arial, sans-serif; line-height: 1.6;">
      <h2>Approval successful</h2>
      <p>Hello,</p>
      <p>{org_name} has been approved as a training partner. You are now its organization administrator.</p>
      <p><a href="{login_url}">Log in to your dashboard</a></p>
      <p>Thank you,<br/>ERNAM Team</p>
    </div>
    """
    send_email_best_effort(to_email, subject, html)


def _send_decline_email(to_email: str, org_name: str):
    subject = "ERNAM: Organization Application Update"
    html = f"""
    <div style="font-family: Arial, sans-serif; line-height: 1.6;">
      <h2>Application update</h2>
      <p>Hello,</p>
      <p>We reviewed the partnership application for {org_name} and cannot approve it at this time.</p>
      <p>You are welcome to contact us or apply again with additional information.</p>
      <p>Thank you,<br/>ERNAM Team</p>
    </div>
    """
    send_email_best_effort(to_email, subject, html)


class ApprovalOrchestrator:
    def __init__(
        self,
        db: Session,
        matcher: OrganizationMatchStrategy | None = None,
        resolver: ApplicationResolver | None = None,
        provisioner: OrganizationProvisioner | None = None,
        linker: PrincipalLinker | None = None,
    ):
        self.db = db
        self.matcher = matcher or NameMatchStrategy()
        self.resolver = resolver or ApplicationResolver(db, self.matcher)
        self.provisioner = provisioner or OrganizationProvisioner(db, self.matcher)
        self.linker = linker or PrincipalLinker(db)

    def approve(
        self,
        application_id: str | None = None,
        organization_id: str | None = None,
        reviewer_id: str | None = None,
    ) -> ApprovalSummary:
        """Approve an application, addressed directly or through its organization.

        ``reviewer_id`` must come from an authenticated session, never from the
        request body.
        """
        application = self.resolver.resolve(application_id=application_id, organization_id=organization_id)

        if application.application_type != ApplicationType.ORGANIZATION:
            raise ValidationError("Only organization applications can be approved here")

        if application.status == ApplicationStatus.APPROVED:
            return self._already_approved(application)

        if application.status == ApplicationStatus.REJECTED and application_id:
            raise ValidationError(
                "Application was rejected. Re-open it first or approve it through its organization."
            )

        org_id = self.provisioner.provision(application)

        try:
            link = self.linker.link(org_id, application.applicant_email)
        except LinkingError:
            logger.error(
                "Approval of application %s stopped after organization %s was approved",
                application.id,
                org_id,
            )
            raise

        try:
            changed = set_application_status(
                self.db,
                application.id,
                ApplicationStatus.APPROVED,
                reviewed_by=reviewer_id,
                unless_status=ApplicationStatus.APPROVED,
            )
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise ProvisioningError(
                "Organization approved, but the application status could not be updated. Retry the approval."
            ) from exc

        if not changed:
            # A concurrent approval marked it first and owns the audit entry.
            logger.info("Application %s was approved concurrently; skipping audit", application.id)
            return self._already_approved(application)

        self._audit(
            AuditAction.ORGANIZATION_APPROVED,
            org_id,
            reviewer_id,
            {
                "application_id": application.id,
                "applicant_email": application.applicant_email,
                "principal_linked": link.linked,
            },
        )

        _send_approval_email(application.applicant_email, application.organization_name)

        if link.linked:
            message = "Organization and User approved successfully"
        else:
            message = "Organization approved; no registered user matches the applicant email yet"
        logger.info("Application %s approved (org=%s, linked=%s)", application.id, org_id, link.linked)
        return ApprovalSummary(
            message=message,
            application_id=application.id,
            organization_id=org_id,
            principal_linked=link.linked,
        )

    def decline(self, organization_id: str | None, reviewer_id: str | None = None) -> DeclineSummary:
        if not organization_id:
            raise ValidationError("Organization ID is required")

        org = get_org_by_id(self.db, organization_id)
        if org is None:
            raise NotFoundError("Organization not found")

        application = self.matcher.latest_application_for(self.db, org, status=ApplicationStatus.PENDING)

        try:
            set_org_status(self.db, org.id, OrgStatus.REJECTED)
            if application is not None:
                set_application_status(self.db, application.id, ApplicationStatus.REJECTED, reviewed_by=reviewer_id)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise ProvisioningError(f"Failed to decline organization '{org.name}'") from exc

        admin_ids = list_org_admin_ids(self.db, org.id)
        try:
            suspended = suspend_users(self.db, admin_ids)
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise LinkingError(
                f"Organization '{org.name}' declined, but its admins could not be suspended"
            ) from exc

        self._audit(
            AuditAction.ORGANIZATION_DECLINED,
            org.id,
            reviewer_id,
            {"org_name": org.name, "application_id": application.id if application else None},
        )

        if application is not None:
            _send_decline_email(application.applicant_email, org.name)

        logger.info("Organization %s declined, %d admin(s) suspended", org.id, suspended)
        return DeclineSummary(
            message="Organization declined successfully",
            organization_id=org.id,
            application_id=application.id if application else None,
            suspended_users=suspended,
        )

    def _already_approved(self, application: Application) -> ApprovalSummary:
        # Reads only: a repeated approval must not write anything.
        org = self.provisioner.find_organization(application)
        org_id = org.id if org else None
        user = get_user_by_email(self.db, application.applicant_email)
        linked = bool(
            user is not None
            and org_id is not None
            and user.organization_id == org_id
            and user.role == UserRole.ORG_ADMIN
        )
        return ApprovalSummary(
            message="Application is already approved",
            application_id=application.id,
            organization_id=org_id,
            principal_linked=linked,
            already_approved=True,
        )

    def _audit(self, action: AuditAction, target: str, actor_id: str | None, details: dict):
        try:
            record_audit(self.db, action, target, actor_id, details)
        except AuditWriteFailure:
            logger.error("Audit entry %s for %s not written", action.value, target, exc_info=True)
