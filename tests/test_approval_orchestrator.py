from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.controllers import org_provisioner
from app.controllers import principal_linker
from app.controllers import audit_controller
from app.controllers.approval_orchestrator import ApprovalOrchestrator
from app.core.errors import LinkingError, NotFoundError, ValidationError
from app.models.audit_log_model import AuditLog
from app.models.enums import ApplicationStatus, ApplicationType, AuditAction, OrgStatus, UserRole, UserStatus
from app.models.org_admin_model import OrganizationAdmin
from app.models.org_application_model import Application
from app.models.org_model import Organization
from app.models.user_model import User
from app.repositories.org_application_repo import set_application_status


def _audit_rows(db):
    return list(db.execute(select(AuditLog)).scalars().all())


def _admin_rows(db):
    return list(db.execute(select(OrganizationAdmin)).scalars().all())


def _boom(*args, **kwargs):
    raise OperationalError("UPDATE", {}, Exception("store unavailable"))


def test_approve_end_to_end(db_session, make_org, make_user, make_application):
    make_org(id="O1", name="Acme Air")
    make_user(id="P1", email="a@acme.test", role=UserRole.PARTICIPANT)
    make_application(id="A1", organization_name="Acme Air", applicant_email="a@acme.test")

    summary = ApprovalOrchestrator(db_session).approve(application_id="A1", reviewer_id="ADMIN1")

    assert summary.organization_id == "O1"
    assert summary.principal_linked is True
    assert summary.already_approved is False

    org = db_session.get(Organization, "O1")
    user = db_session.get(User, "P1")
    application = db_session.get(Application, "A1")
    assert org.status == OrgStatus.APPROVED
    assert user.role == UserRole.ORG_ADMIN
    assert user.status == UserStatus.APPROVED
    assert user.organization_id == "O1"
    assert application.status == ApplicationStatus.APPROVED
    assert application.reviewed_by == "ADMIN1"
    assert application.reviewed_at is not None

    entries = _audit_rows(db_session)
    assert len(entries) == 1
    assert entries[0].action == AuditAction.ORGANIZATION_APPROVED.value
    assert entries[0].target_resource == "O1"
    assert entries[0].actor_id == "ADMIN1"
    assert entries[0].details["application_id"] == "A1"
    assert entries[0].details["applicant_email"] == "a@acme.test"

    links = _admin_rows(db_session)
    assert [(link.organization_id, link.user_id) for link in links] == [("O1", "P1")]


def test_approve_twice_short_circuits(db_session, make_org, make_user, make_application, monkeypatch):
    make_org(id="O1")
    make_user(id="P1")
    make_application(id="A1")
    orchestrator = ApprovalOrchestrator(db_session)
    orchestrator.approve(application_id="A1", reviewer_id="ADMIN1")

    calls = []
    monkeypatch.setattr(org_provisioner, "set_org_status", lambda *a, **k: calls.append(a))
    monkeypatch.setattr(principal_linker, "update_user", lambda *a, **k: calls.append(a))

    second = orchestrator.approve(application_id="A1", reviewer_id="ADMIN2")

    assert second.already_approved is True
    assert second.message == "Application is already approved"
    assert second.organization_id == "O1"
    assert second.principal_linked is True
    assert calls == []
    assert len(_audit_rows(db_session)) == 1
    assert len(_admin_rows(db_session)) == 1
    assert db_session.get(Application, "A1").reviewed_by == "ADMIN1"


def test_failed_link_leaves_org_approved_and_retry_completes(
    db_session, make_org, make_user, make_application, monkeypatch
):
    make_org(id="O1")
    make_user(id="P1")
    make_application(id="A1")
    orchestrator = ApprovalOrchestrator(db_session)

    monkeypatch.setattr(principal_linker, "update_user", _boom)
    with pytest.raises(LinkingError):
        orchestrator.approve(application_id="A1", reviewer_id="ADMIN1")

    assert db_session.get(Organization, "O1").status == OrgStatus.APPROVED
    assert db_session.get(Application, "A1").status == ApplicationStatus.PENDING
    assert db_session.get(User, "P1").role == UserRole.PARTICIPANT
    assert _audit_rows(db_session) == []

    monkeypatch.undo()
    org_updates = []
    real_set_org_status = org_provisioner.set_org_status

    def _spy(*args, **kwargs):
        org_updates.append(args)
        return real_set_org_status(*args, **kwargs)

    monkeypatch.setattr(org_provisioner, "set_org_status", _spy)

    summary = orchestrator.approve(application_id="A1", reviewer_id="ADMIN1")

    assert summary.principal_linked is True
    assert org_updates == []
    assert db_session.get(User, "P1").organization_id == "O1"
    assert db_session.get(Application, "A1").status == ApplicationStatus.APPROVED
    assert len(_audit_rows(db_session)) == 1


def test_missing_organization_is_fatal_and_writes_nothing(db_session, make_user, make_application):
    make_user(id="P1")
    make_application(id="A1", organization_name="Ghost Airlines", details={"organization_id": ""})

    with pytest.raises(NotFoundError) as exc:
        ApprovalOrchestrator(db_session).approve(application_id="A1", reviewer_id="ADMIN1")

    assert str(exc.value) == "Organization 'Ghost Airlines' not found"
    assert db_session.get(Application, "A1").status == ApplicationStatus.PENDING
    assert db_session.get(User, "P1").role == UserRole.PARTICIPANT
    assert _audit_rows(db_session) == []
    assert _admin_rows(db_session) == []


def test_approve_without_registered_user(db_session, make_org, make_application):
    make_org(id="O1")
    make_application(id="A1", applicant_email="nobody@acme.test")

    summary = ApprovalOrchestrator(db_session).approve(application_id="A1", reviewer_id="ADMIN1")

    assert summary.principal_linked is False
    assert summary.organization_id == "O1"
    assert db_session.get(Organization, "O1").status == OrgStatus.APPROVED
    assert db_session.get(Application, "A1").status == ApplicationStatus.APPROVED
    assert _admin_rows(db_session) == []


def test_approval_overwrites_previous_role(db_session, make_org, make_user, make_application):
    make_org(id="O1")
    make_org(id="O2", name="Other Org", status=OrgStatus.APPROVED)
    make_user(id="P1", role=UserRole.INSTRUCTOR, status=UserStatus.APPROVED, organization_id="O2")
    make_application(id="A1")

    ApprovalOrchestrator(db_session).approve(application_id="A1")

    user = db_session.get(User, "P1")
    assert user.role == UserRole.ORG_ADMIN
    assert user.organization_id == "O1"


def test_reverse_lookup_approves_latest_application(db_session, make_org, make_user, make_application):
    make_org(id="O1")
    make_user(id="P1", email="new@acme.test")
    make_application(
        id="OLD",
        applicant_email="old@acme.test",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    make_application(
        id="NEW",
        applicant_email="new@acme.test",
        created_at=datetime(2024, 6, 1, tzinfo=timezone.utc),
    )

    summary = ApprovalOrchestrator(db_session).approve(organization_id="O1", reviewer_id="ADMIN1")

    assert summary.application_id == "NEW"
    assert summary.principal_linked is True
    assert db_session.get(Application, "OLD").status == ApplicationStatus.PENDING
    assert db_session.get(Application, "NEW").status == ApplicationStatus.APPROVED


def test_rejected_application_reactivated_through_organization(db_session, make_org, make_application):
    make_org(id="O1", status=OrgStatus.REJECTED)
    make_application(id="A1", status=ApplicationStatus.REJECTED)

    summary = ApprovalOrchestrator(db_session).approve(organization_id="O1", reviewer_id="ADMIN1")

    assert summary.application_id == "A1"
    assert db_session.get(Organization, "O1").status == OrgStatus.APPROVED
    assert db_session.get(Application, "A1").status == ApplicationStatus.APPROVED


def test_rejected_application_not_approved_by_id(db_session, make_org, make_application):
    make_org(id="O1", status=OrgStatus.REJECTED)
    make_application(id="A1", status=ApplicationStatus.REJECTED)

    with pytest.raises(ValidationError):
        ApprovalOrchestrator(db_session).approve(application_id="A1")

    assert db_session.get(Organization, "O1").status == OrgStatus.REJECTED


def test_only_organization_applications_are_approved(db_session, make_org, make_application):
    make_org(id="O1")
    make_application(id="A1", application_type=ApplicationType.INSTRUCTOR)

    with pytest.raises(ValidationError):
        ApprovalOrchestrator(db_session).approve(application_id="A1")


def test_audit_failure_does_not_fail_approval(db_session, make_org, make_user, make_application, monkeypatch):
    make_org(id="O1")
    make_user(id="P1")
    make_application(id="A1")
    monkeypatch.setattr(audit_controller, "create_audit_log", _boom)

    summary = ApprovalOrchestrator(db_session).approve(application_id="A1", reviewer_id="ADMIN1")

    assert summary.principal_linked is True
    assert db_session.get(Application, "A1").status == ApplicationStatus.APPROVED
    assert _audit_rows(db_session) == []


def test_decline_rejects_org_application_and_suspends_admins(db_session, make_org, make_user, make_application):
    make_org(id="O1")
    make_user(id="P1", role=UserRole.ORG_ADMIN, status=UserStatus.APPROVED, organization_id="O1")
    make_user(id="P2", email="staff@acme.test", role=UserRole.INSTRUCTOR, status=UserStatus.APPROVED, organization_id="O1")
    make_application(id="A1")

    summary = ApprovalOrchestrator(db_session).decline("O1", reviewer_id="ADMIN1")

    assert summary.application_id == "A1"
    assert summary.suspended_users == 1
    assert db_session.get(Organization, "O1").status == OrgStatus.REJECTED
    assert db_session.get(Application, "A1").status == ApplicationStatus.REJECTED
    assert db_session.get(User, "P1").status == UserStatus.SUSPENDED
    assert db_session.get(User, "P2").status == UserStatus.APPROVED
    entries = _audit_rows(db_session)
    assert [e.action for e in entries] == [AuditAction.ORGANIZATION_DECLINED.value]


def test_decline_never_touches_approved_application(db_session, make_org, make_application):
    make_org(id="O1", status=OrgStatus.APPROVED)
    make_application(id="A1", status=ApplicationStatus.APPROVED)

    summary = ApprovalOrchestrator(db_session).decline("O1")

    assert summary.application_id is None
    assert db_session.get(Organization, "O1").status == OrgStatus.REJECTED
    assert db_session.get(Application, "A1").status == ApplicationStatus.APPROVED


def test_decline_requires_existing_org(db_session):
    orchestrator = ApprovalOrchestrator(db_session)
    with pytest.raises(ValidationError):
        orchestrator.decline(None)
    with pytest.raises(NotFoundError):
        orchestrator.decline("missing")


def test_approve_does_not_promote_lookalike_email(db_session, make_org, make_user, make_application):
    make_org(id="O1")
    make_user(id="P1", email="jxdoe@acme.test")
    make_application(id="A1", applicant_email="j_doe@acme.test")

    summary = ApprovalOrchestrator(db_session).approve(application_id="A1", reviewer_id="ADMIN1")

    assert summary.principal_linked is False
    user = db_session.get(User, "P1")
    assert user.role == UserRole.PARTICIPANT
    assert user.organization_id is None
    assert _admin_rows(db_session) == []


def test_concurrent_approval_writes_single_audit_row(db_session, make_org, make_user, make_application):
    make_org(id="O1")
    make_user(id="P1")
    make_application(id="A1")

    class RacingLinker(principal_linker.PrincipalLinker):
        # Another admin finishes approving the same application while this one links.
        def link(self, organization_id, applicant_email):
            result = super().link(organization_id, applicant_email)
            set_application_status(db_session, "A1", ApplicationStatus.APPROVED, reviewed_by="ADMIN2")
            return result

    summary = ApprovalOrchestrator(db_session, linker=RacingLinker(db_session)).approve(
        application_id="A1", reviewer_id="ADMIN1"
    )

    assert summary.already_approved is True
    assert summary.principal_linked is True
    assert db_session.get(Application, "A1").reviewed_by == "ADMIN2"
    assert _audit_rows(db_session) == []
