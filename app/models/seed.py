from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.core.db import SessionLocal, init_db
from app.core.logger import setup_logging
from app.models.enums import ApplicationStatus, ApplicationType, OrgStatus, OrgType, UserRole, UserStatus
from app.models.org_application_model import Application
from app.models.org_model import Organization
from app.models.user_model import User
from app.repositories.org_application_repo import create_application

logger = logging.getLogger(__name__)

SEED_ADMIN = {
    "email": "admin@ernam.example.com",
    "full_name": "Platform Administrator",
}

SEED_PENDING_ORGS = [
    {
        "name": "Sahel Regional Airways",
        "org_type": OrgType.AIRLINE,
        "country": "Niger",
        "applicant_name": "Amina Issoufou",
        "applicant_email": "amina@sahel-airways.example.com",
        "applicant_phone": "+227 20 00 00 00",
        "message": "We would like to train our cabin crew with ERNAM.",
    },
    {
        "name": "Atlas MRO Services",
        "org_type": OrgType.MRO,
        "country": "Morocco",
        "applicant_name": "Youssef Benali",
        "applicant_email": "y.benali@atlas-mro.example.com",
        "applicant_phone": "+212 5 22 00 00 00",
        "message": "Part-66 refresher courses for 40 technicians.",
    },
]


def seed_admin(db: Session) -> User:
    existing = db.query(User).filter(User.email == SEED_ADMIN["email"]).first()
    if existing:
        return existing
    admin = User(
        email=SEED_ADMIN["email"],
        full_name=SEED_ADMIN["full_name"],
        role=UserRole.ERNAM_ADMIN,
        status=UserStatus.APPROVED,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


def seed_pending_organizations(db: Session) -> list[Organization]:
    created_orgs: list[Organization] = []

    for item in SEED_PENDING_ORGS:
        existing_org = db.query(Organization).filter(Organization.name == item["name"]).first()
        existing_app = db.query(Application).filter(Application.organization_name == item["name"]).first()
        if existing_org or existing_app:
            continue

        org = Organization(
            name=item["name"],
            org_type=item["org_type"],
            country=item["country"],
            contact_email=item["applicant_email"],
            contact_phone=item["applicant_phone"],
            status=OrgStatus.PENDING,
        )
        db.add(org)
        db.commit()
        db.refresh(org)

        create_application(
            db,
            application_type=ApplicationType.ORGANIZATION,
            organization_name=item["name"],
            applicant_name=item["applicant_name"],
            applicant_email=item["applicant_email"],
            applicant_phone=item["applicant_phone"],
            status=ApplicationStatus.PENDING,
            details={"organization_id": org.id, "message": item["message"], "org_type": item["org_type"].value},
        )
        created_orgs.append(org)

    return created_orgs


def run_seed() -> None:
    if SessionLocal is None:
        raise RuntimeError("DATABASE_URL is not set")
    setup_logging()
    init_db()
    db = SessionLocal()
    try:
        admin = seed_admin(db)
        orgs = seed_pending_organizations(db)
        logger.info("Seeded admin %s and %d pending organization(s)", admin.email, len(orgs))
    finally:
        db.close()


if __name__ == "__main__":
    run_seed()
