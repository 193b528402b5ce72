from dataclasses import asdict
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.db import get_db
from app.core.auth import require_admin
from app.controllers.approval_orchestrator import ApprovalOrchestrator
from app.schemas.approval_schema import ApprovalRequest, ApprovalResponse, DeclineRequest, DeclineResponse

router = APIRouter(prefix="/admin", tags=["admin"])


def get_approval_orchestrator(db: Session = Depends(get_db)) -> ApprovalOrchestrator:
    return ApprovalOrchestrator(db)


@router.post("/approve-organization", response_model=ApprovalResponse)
def approve_organization_route(
    payload: ApprovalRequest,
    orchestrator: ApprovalOrchestrator = Depends(get_approval_orchestrator),
    admin=Depends(require_admin),
):
    summary = orchestrator.approve(
        application_id=payload.application_id,
        organization_id=payload.org_id,
        reviewer_id=admin.id,
    )
    return ApprovalResponse(**asdict(summary))


@router.post("/decline-organization", response_model=DeclineResponse)
def decline_organization_route(
    payload: DeclineRequest,
    orchestrator: ApprovalOrchestrator = Depends(get_approval_orchestrator),
    admin=Depends(require_admin),
):
    summary = orchestrator.decline(payload.org_id, reviewer_id=admin.id)
    return DeclineResponse(**asdict(summary))
