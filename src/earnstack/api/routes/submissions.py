"""Submission REST API routes.

Routes:
    POST  /submissions               : Worker submits work, claiming a slot
    GET   /submissions               : A worker's submissions, one page at a time
    GET   /submissions/review        : Pending submissions awaiting the buyer
    PATCH /submissions/approve/{id}  : Buyer approves; worker is paid
    PATCH /submissions/reject/{id}   : Buyer rejects; the slot reopens
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, get_current_identity, require_roles
from earnstack.api.deps import get_app_settings, get_db_session
from earnstack.config import Settings
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import ValidationError
from earnstack.schemas.submissions import (
    CreateSubmissionRequest,
    CreateSubmissionResponse,
    SubmissionPage,
    SubmissionResponse,
    SuccessResponse,
)
from earnstack.services.submission_service import SubmissionService

router = APIRouter(prefix="/submissions", tags=["Submissions"])

buyer_only = require_roles(UserRole.BUYER)
reviewer = require_roles(UserRole.BUYER, UserRole.ADMIN)


@router.post(
    "",
    response_model=CreateSubmissionResponse,
    summary="Submit work for a task",
)
async def create_submission(
    request: CreateSubmissionRequest,
    identity: Identity = Depends(require_roles(UserRole.WORKER)),
    session: AsyncSession = Depends(get_db_session),
) -> CreateSubmissionResponse:
    """Claim one open slot and record a pending submission.

    Returns 409 when the task has no open slot left.
    """
    ensure_self(identity, request.worker_email)
    svc = SubmissionService(session)
    submission = await svc.submit(
        task_id=request.task_id,
        worker_email=request.worker_email,
        buyer_email=request.buyer_email,
        payable_amount=request.payable_amount,
        submission_details=request.submission_details,
        worker_name=request.worker_name,
    )
    return CreateSubmissionResponse(submission_id=submission.id)


@router.get(
    "",
    response_model=SubmissionPage,
    summary="List a worker's submissions",
)
async def list_submissions(
    email: str = Query(...),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int | None = Query(None, ge=1),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> SubmissionPage:
    ensure_self(identity, email)
    size = size or settings.default_page_size
    if size > settings.max_page_size:
        raise ValidationError(f"size must not exceed {settings.max_page_size}")

    items, total = await SubmissionService(session).list_for_worker(email, page, size)
    return SubmissionPage(
        submissions=[SubmissionResponse.model_validate(s) for s in items],
        total_count=total,
    )


@router.get(
    "/review",
    response_model=list[SubmissionResponse],
    summary="Pending submissions for a buyer",
)
async def review_queue(
    email: str = Query(...),
    identity: Identity = Depends(buyer_only),
    session: AsyncSession = Depends(get_db_session),
) -> list[SubmissionResponse]:
    ensure_self(identity, email)
    items = await SubmissionService(session).list_pending_for_buyer(email)
    return [SubmissionResponse.model_validate(s) for s in items]


@router.patch(
    "/approve/{submission_id}",
    response_model=SuccessResponse,
    summary="Approve a submission",
)
async def approve_submission(
    submission_id: uuid.UUID,
    identity: Identity = Depends(reviewer),
    session: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    """Only the task owner may approve; admins may review any submission."""
    acting_buyer = None if identity.is_admin else identity.email
    await SubmissionService(session).approve(submission_id, acting_buyer=acting_buyer)
    return SuccessResponse()


@router.patch(
    "/reject/{submission_id}",
    response_model=SuccessResponse,
    summary="Reject a submission",
)
async def reject_submission(
    submission_id: uuid.UUID,
    identity: Identity = Depends(reviewer),
    session: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    acting_buyer = None if identity.is_admin else identity.email
    await SubmissionService(session).reject(submission_id, acting_buyer=acting_buyer)
    return SuccessResponse()
