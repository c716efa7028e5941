"""Tests for StatsService dashboard figures."""

from __future__ import annotations

from decimal import Decimal

import pytest

from earnstack.domain.enums import UserRole
from earnstack.services.payment_service import PaymentService
from earnstack.services.stats_service import StatsService
from earnstack.services.submission_service import SubmissionService
from earnstack.services.task_service import TaskService


class TestTopWorkers:
    @pytest.mark.asyncio
    async def test_richest_workers_first_and_limited(self, session, make_user) -> None:
        for n in range(8):
            await make_user(f"w{n}@example.com", UserRole.WORKER, n * 10)
        await make_user("richbuyer@example.com", UserRole.BUYER, 10_000)

        top = await StatsService(session).top_workers()

        assert len(top) == 6
        assert [u.coin for u in top] == [70, 60, 50, 40, 30, 20]
        assert all(u.role == "worker" for u in top)

    @pytest.mark.asyncio
    async def test_explicit_limit(self, session, seeded) -> None:
        top = await StatsService(session).top_workers(limit=1)
        assert len(top) == 1


class TestWorkerStats:
    @pytest.mark.asyncio
    async def test_counts_and_earnings(self, session, seeded) -> None:
        task = await TaskService(session).create_task(seeded["buyer"].email, 7, 3, "Survey")
        subs = SubmissionService(session)
        made = [
            await subs.submit(task.id, seeded["worker"].email, task.buyer_email, 7)
            for _ in range(3)
        ]
        await subs.approve(made[0].id)
        await subs.approve(made[1].id)
        await session.commit()

        stats = await StatsService(session).worker_stats(seeded["worker"].email)
        assert stats.total_submissions == 3
        assert stats.pending_submissions == 1
        assert stats.total_earnings == 14

    @pytest.mark.asyncio
    async def test_worker_without_submissions(self, session, seeded) -> None:
        stats = await StatsService(session).worker_stats(seeded["worker2"].email)
        assert (stats.total_submissions, stats.pending_submissions, stats.total_earnings) == (0, 0, 0)


class TestBuyerAndAdminStats:
    @pytest.mark.asyncio
    async def test_buyer_stats(self, session, seeded) -> None:
        tasks = TaskService(session)
        await tasks.create_task(seeded["buyer"].email, 5, 4, "A")
        await tasks.create_task(seeded["buyer"].email, 5, 2, "B")
        await PaymentService(session).purchase_coins(seeded["buyer"].email, 100, Decimal("1.00"))
        await session.commit()

        stats = await StatsService(session).buyer_stats(seeded["buyer"].email)
        assert stats.total_tasks == 2
        assert stats.pending_workers == 6
        assert stats.total_paid == Decimal("1.00")

    @pytest.mark.asyncio
    async def test_admin_stats(self, session, seeded) -> None:
        await PaymentService(session).purchase_coins(seeded["buyer"].email, 100, Decimal("2.50"))
        await session.commit()

        stats = await StatsService(session).admin_stats()
        assert stats.total_workers == 2
        assert stats.total_buyers == 1
        assert stats.total_coins == 200
        assert stats.total_payments == Decimal("2.50")
