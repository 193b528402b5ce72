import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("JWT_EXPIRES_MINUTES", "60")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.db import get_db
from app.core.security import create_access_token
from app.main import app
from app.models.base import Base
from app.models import audit_log_model, org_admin_model, org_application_model, org_model, user_model  # noqa: F401
from app.models.enums import ApplicationStatus, ApplicationType, OrgStatus, UserRole, UserStatus
from app.models.org_model import Organization
from app.models.user_model import User
from app.repositories.org_application_repo import create_application


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_org(db_session):
    def _make(name="Acme Air", status=OrgStatus.PENDING, **fields):
        org = Organization(name=name, status=status, **fields)
        db_session.add(org)
        db_session.commit()
        db_session.refresh(org)
        return org

    return _make


@pytest.fixture()
def make_user(db_session):
    def _make(email="a@acme.test", role=UserRole.PARTICIPANT, status=UserStatus.PENDING, **fields):
        user = User(email=email, role=role, status=status, **fields)
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture()
def make_application(db_session):
    def _make(
        organization_name="Acme Air",
        applicant_email="a@acme.test",
        status=ApplicationStatus.PENDING,
        details=None,
        **fields,
    ):
        fields.setdefault("application_type", ApplicationType.ORGANIZATION)
        fields.setdefault("applicant_name", "Alex Applicant")
        return create_application(
            db_session,
            organization_name=organization_name,
            applicant_email=applicant_email,
            status=status,
            details=details or {},
            **fields,
        )

    return _make


@pytest.fixture()
def admin(make_user):
    return make_user(
        id="ADMIN1",
        email="admin@ernam.test",
        full_name="Platform Admin",
        role=UserRole.ERNAM_ADMIN,
        status=UserStatus.APPROVED,
    )


@pytest.fixture()
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin.id)}"}
