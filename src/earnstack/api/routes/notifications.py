"""Notification inbox routes.

Routes:
    GET   /notifications       : A user's notifications, newest first
    PATCH /notifications/read  : Mark all of a user's notifications read
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, get_current_identity
from earnstack.api.deps import get_db_session
from earnstack.schemas.notifications import NotificationResponse
from earnstack.schemas.users import ModifiedResponse
from earnstack.services.notification_service import NotificationService

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get(
    "",
    response_model=list[NotificationResponse],
    summary="List notifications",
)
async def list_notifications(
    email: str = Query(...),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> list[NotificationResponse]:
    ensure_self(identity, email)
    items = await NotificationService(session).list_for(email)
    return [NotificationResponse.model_validate(n) for n in items]


@router.patch(
    "/read",
    response_model=ModifiedResponse,
    summary="Mark notifications read",
)
async def mark_read(
    email: str = Query(...),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> ModifiedResponse:
    ensure_self(identity, email)
    count = await NotificationService(session).mark_all_read(email)
    return ModifiedResponse(modified_count=count)
