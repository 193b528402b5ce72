"""Error taxonomy of the organization approval workflow and its HTTP rendering."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ApprovalError(Exception):
    """Base class for failures the admin UI can render as an actionable message."""

    kind = "approval_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_payload(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(ApprovalError):
    """The caller gave insufficient or contradictory identifiers."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApprovalError):
    """An application or organization lookup came back empty."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class NoApplicationRecordError(NotFoundError):
    """The organization exists but no application row references it.

    Operators have to create the application trail by hand; this is not a bug.
    """

    kind = "no_application_record"


class ProvisioningError(ApprovalError):
    """Writing the organization (or the application status) failed."""

    kind = "provisioning_error"


class LinkingError(ApprovalError):
    """Updating the applicant's user row failed after the organization was approved."""

    kind = "linking_error"


class AuditWriteFailure(ApprovalError):
    """Audit entry could not be written. Logged by callers, never propagated."""

    kind = "audit_write_failure"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApprovalError)
    async def approval_error_handler(request: Request, exc: ApprovalError):
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", exc.kind, request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"kind": "internal_error", "message": "Internal Server Error"},
        )
