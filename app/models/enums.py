import enum


def enum_values(enum_cls) -> list[str]:
    # Persist the lowercase values the rest of the platform already stores, not member names.
    return [member.value for member in enum_cls]


class UserRole(str, enum.Enum):
    PARTICIPANT = "participant"
    INSTRUCTOR = "instructor"
    ORG_ADMIN = "org_admin"
    ERNAM_ADMIN = "ernam_admin"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class OrgStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ApplicationType(str, enum.Enum):
    ORGANIZATION = "organization"
    INSTRUCTOR = "instructor"
    PARTICIPANT = "participant"


class ApplicationStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class OrgType(str, enum.Enum):
    AIRLINE = "airline"
    MRO = "mro"
    TRAINING_CENTER = "training_center"
    AIRPORT = "airport"
    GOVERNMENT = "government"
    OTHER = "other"


class AuditAction(str, enum.Enum):
    ORGANIZATION_APPROVED = "ORGANIZATION_APPROVED"
    ORGANIZATION_DECLINED = "ORGANIZATION_DECLINED"
    APPLICATION_REOPENED = "APPLICATION_REOPENED"
