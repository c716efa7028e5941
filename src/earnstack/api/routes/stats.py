"""Dashboard statistics routes.

Routes:
    GET /top-workers           : Workers with the most coins
    GET /worker-stats/{email}  : Submission and earnings totals for a worker
    GET /buyer-stats/{email}   : Task, open slot and spend totals for a buyer
    GET /admin-stats           : Platform-wide totals (admin)
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, get_current_identity, require_roles
from earnstack.api.deps import get_db_session
from earnstack.domain.enums import UserRole
from earnstack.schemas.stats import (
    AdminStatsResponse,
    BuyerStatsResponse,
    WorkerStatsResponse,
)
from earnstack.schemas.users import UserResponse
from earnstack.services.stats_service import StatsService

router = APIRouter(tags=["Stats"])


@router.get(
    "/top-workers",
    response_model=list[UserResponse],
    summary="Top workers by coin balance",
)
async def top_workers(
    session: AsyncSession = Depends(get_db_session),
) -> list[UserResponse]:
    workers = await StatsService(session).top_workers()
    return [UserResponse.model_validate(w) for w in workers]


@router.get(
    "/worker-stats/{email}",
    response_model=WorkerStatsResponse,
    summary="Worker dashboard figures",
)
async def worker_stats(
    email: str,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> WorkerStatsResponse:
    ensure_self(identity, email)
    stats = await StatsService(session).worker_stats(email)
    return WorkerStatsResponse.model_validate(stats)


@router.get(
    "/buyer-stats/{email}",
    response_model=BuyerStatsResponse,
    summary="Buyer dashboard figures",
)
async def buyer_stats(
    email: str,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> BuyerStatsResponse:
    ensure_self(identity, email)
    stats = await StatsService(session).buyer_stats(email)
    return BuyerStatsResponse.model_validate(stats)


@router.get(
    "/admin-stats",
    response_model=AdminStatsResponse,
    summary="Platform-wide figures",
)
async def admin_stats(
    _: Identity = Depends(require_roles(UserRole.ADMIN)),
    session: AsyncSession = Depends(get_db_session),
) -> AdminStatsResponse:
    stats = await StatsService(session).admin_stats()
    return AdminStatsResponse.model_validate(stats)
