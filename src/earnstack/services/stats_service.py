"""Stats Service: read-only dashboard figures.

Nothing here writes; every figure is an aggregate over the tables the
workflows own.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from earnstack.config import get_settings
from earnstack.domain.enums import UserRole
from earnstack.infrastructure.database.repositories import (
    PaymentRepository,
    SubmissionRepository,
    TaskRepository,
    UserRepository,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from earnstack.infrastructure.database.orm_models import User


@dataclass(frozen=True)
class WorkerStats:
    total_submissions: int
    pending_submissions: int
    total_earnings: int


@dataclass(frozen=True)
class BuyerStats:
    total_tasks: int
    pending_workers: int
    total_paid: Decimal


@dataclass(frozen=True)
class AdminStats:
    total_workers: int
    total_buyers: int
    total_coins: int
    total_payments: Decimal


class StatsService:
    def __init__(self, session: AsyncSession) -> None:
        self._users = UserRepository(session)
        self._tasks = TaskRepository(session)
        self._submissions = SubmissionRepository(session)
        self._payments = PaymentRepository(session)

    async def top_workers(self, limit: int | None = None) -> list[User]:
        """Workers with the highest coin balances."""
        limit = limit or get_settings().top_workers_limit
        return await self._users.top_by_coin(UserRole.WORKER, limit)

    async def worker_stats(self, email: str) -> WorkerStats:
        """Submission counts and coins earned from approved submissions."""
        total, pending, earnings = await self._submissions.worker_summary(email)
        return WorkerStats(
            total_submissions=total,
            pending_submissions=pending,
            total_earnings=earnings,
        )

    async def buyer_stats(self, email: str) -> BuyerStats:
        total_tasks, open_slots = await self._tasks.buyer_summary(email)
        paid = await self._payments.total_price(email)
        return BuyerStats(
            total_tasks=total_tasks,
            pending_workers=open_slots,
            total_paid=Decimal(str(paid)),
        )

    async def admin_stats(self) -> AdminStats:
        return AdminStats(
            total_workers=await self._users.count_by_role(UserRole.WORKER),
            total_buyers=await self._users.count_by_role(UserRole.BUYER),
            total_coins=await self._users.total_coins(),
            total_payments=Decimal(str(await self._payments.total_price())),
        )
