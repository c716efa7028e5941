"""Tests for TaskService: funded creation and slot accounting."""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy import func, select

from earnstack.domain.exceptions import (
    CapacityExhaustedError,
    InsufficientBalanceError,
    TaskNotFoundError,
    ValidationError,
)
from earnstack.infrastructure.database.orm_models import Task
from earnstack.services.ledger_service import LedgerService
from earnstack.services.task_service import TaskService


async def _task_count(session) -> int:
    return (await session.execute(select(func.count()).select_from(Task))).scalar_one()


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_funded_task_reserves_all_slots(self, session, seeded) -> None:
        buyer = seeded["buyer"].email
        task = await TaskService(session).create_task(
            buyer_email=buyer,
            payable_amount=10,
            required_workers=5,
            task_title="Label 50 photos",
            buyer_name="Bea Buyer",
        )
        await session.commit()

        assert task.required_workers == 5
        assert task.payable_amount == 10
        assert await LedgerService(session).balance(buyer) == 50

    @pytest.mark.asyncio
    async def test_underfunded_task_is_not_created(self, session, seeded) -> None:
        buyer = seeded["buyer"].email
        with pytest.raises(InsufficientBalanceError):
            await TaskService(session).create_task(
                buyer_email=buyer,
                payable_amount=30,
                required_workers=5,
                task_title="Too expensive",
            )
        await session.rollback()

        assert await _task_count(session) == 0
        assert await LedgerService(session).balance(buyer) == 100

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("pay", "workers"), [(0, 3), (5, 0), (-1, 2)])
    async def test_non_positive_inputs_rejected(self, session, seeded, pay, workers) -> None:
        with pytest.raises(ValidationError):
            await TaskService(session).create_task(
                buyer_email=seeded["buyer"].email,
                payable_amount=pay,
                required_workers=workers,
                task_title="Bad",
            )
        assert await LedgerService(session).balance(seeded["buyer"].email) == 100


class TestCapacity:
    @pytest.mark.asyncio
    async def test_claim_until_exhausted(self, session, seeded) -> None:
        svc = TaskService(session)
        task = await svc.create_task(seeded["buyer"].email, 10, 2, "Two slots")

        assert await svc.claim_capacity(task.id) == 1
        assert await svc.claim_capacity(task.id) == 0
        with pytest.raises(CapacityExhaustedError):
            await svc.claim_capacity(task.id)
        assert (await svc.get_task(task.id)).required_workers == 0

    @pytest.mark.asyncio
    async def test_claim_on_missing_task(self, session, seeded) -> None:
        with pytest.raises(TaskNotFoundError):
            await TaskService(session).claim_capacity(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_release_gives_one_slot_back(self, session, seeded) -> None:
        svc = TaskService(session)
        task = await svc.create_task(seeded["buyer"].email, 10, 1, "One slot")
        await svc.claim_capacity(task.id)

        assert await svc.release_capacity(task.id) == 1

    @pytest.mark.asyncio
    async def test_release_on_missing_task_returns_none(self, session, seeded) -> None:
        assert await TaskService(session).release_capacity(uuid.uuid4()) is None


class TestQueries:
    @pytest.mark.asyncio
    async def test_open_tasks_exclude_full_ones(self, session, seeded) -> None:
        svc = TaskService(session)
        open_task = await svc.create_task(seeded["buyer"].email, 5, 2, "Open")
        full_task = await svc.create_task(seeded["buyer"].email, 5, 1, "Full")
        await svc.claim_capacity(full_task.id)
        await session.commit()

        open_ids = [t.id for t in await svc.list_open_tasks()]
        assert open_ids == [open_task.id]
        assert len(await svc.list_all_tasks()) == 2
        assert len(await svc.list_for_buyer(seeded["buyer"].email)) == 2
        assert await svc.list_for_buyer("nobody@example.com") == []

    @pytest.mark.asyncio
    async def test_get_missing_task(self, session, seeded) -> None:
        with pytest.raises(TaskNotFoundError):
            await TaskService(session).get_task(uuid.uuid4())


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_keeps_reserved_coins_spent(self, session, seeded) -> None:
        svc = TaskService(session)
        task = await svc.create_task(seeded["buyer"].email, 10, 3, "Doomed")
        await svc.delete_task(task.id)
        await session.commit()

        assert await _task_count(session) == 0
        assert await LedgerService(session).balance(seeded["buyer"].email) == 70

    @pytest.mark.asyncio
    async def test_delete_missing_task(self, session, seeded) -> None:
        with pytest.raises(TaskNotFoundError):
            await TaskService(session).delete_task(uuid.uuid4())
