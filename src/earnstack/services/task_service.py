"""Task Service: task records and the open-slot countdown.

``required_workers`` is written only here. Creating a task reserves
``payable_amount x required_workers`` coins from the buyer up front; a slot
is claimed per accepted submission and released per rejected one.

Releasing a slot does not refund the buyer for it. That is the observed
behavior of the marketplace and is kept until product decides otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.domain.exceptions import (
    CapacityExhaustedError,
    TaskNotFoundError,
    ValidationError,
)
from earnstack.infrastructure.database.orm_models import Task
from earnstack.infrastructure.database.repositories import TaskRepository
from earnstack.logging_config import get_logger
from earnstack.services.ledger_service import LedgerService

if TYPE_CHECKING:
    import uuid
    from datetime import datetime

    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class TaskService:
    """Manages the task lifecycle."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._task_repo = TaskRepository(session)
        self._ledger = LedgerService(session)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    async def create_task(
        self,
        buyer_email: str,
        payable_amount: int,
        required_workers: int,
        task_title: str,
        task_detail: str | None = None,
        submission_info: str | None = None,
        task_image_url: str | None = None,
        completion_date: datetime | None = None,
        buyer_name: str | None = None,
    ) -> Task:
        """Debit the buyer for every slot, then store the task.

        Raises:
            InsufficientBalanceError: The buyer cannot fund all slots. No task
                is stored and no coins move.
            ValidationError: Non-positive pay or worker count.
        """
        if payable_amount <= 0:
            raise ValidationError("payable_amount must be positive")
        if required_workers <= 0:
            raise ValidationError("required_workers must be positive")

        total = payable_amount * required_workers
        await self._ledger.debit(buyer_email, total)

        task = Task(
            buyer_email=buyer_email,
            buyer_name=buyer_name,
            task_title=task_title,
            task_detail=task_detail,
            submission_info=submission_info,
            task_image_url=task_image_url,
            completion_date=completion_date,
            payable_amount=payable_amount,
            required_workers=required_workers,
        )
        task = await self._task_repo.create(task)

        logger.info(
            "task.created",
            task_id=str(task.id),
            buyer=buyer_email,
            reserved=total,
            required_workers=required_workers,
        )
        return task

    # ------------------------------------------------------------------
    # Capacity
    # ------------------------------------------------------------------

    async def claim_capacity(self, task_id: uuid.UUID) -> int:
        """Take one open slot. Returns the slots left.

        Raises:
            CapacityExhaustedError: The task has no open slot.
            TaskNotFoundError: No such task.
        """
        remaining = await self._task_repo.decrement_if_positive(task_id)
        if remaining is None:
            await self.get_task(task_id)
            raise CapacityExhaustedError(str(task_id))
        logger.info("task.capacity_claimed", task_id=str(task_id), remaining=remaining)
        return remaining

    async def release_capacity(self, task_id: uuid.UUID) -> int | None:
        """Give one slot back. Returns the new count, or None if the task is gone."""
        remaining = await self._task_repo.increment(task_id)
        if remaining is None:
            logger.warning("task.release_on_missing_task", task_id=str(task_id))
            return None
        logger.info("task.capacity_released", task_id=str(task_id), remaining=remaining)
        return remaining

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    async def delete_task(self, task_id: uuid.UUID) -> None:
        """Remove a task outright. Reserved coins are not returned to the buyer."""
        if not await self._task_repo.delete(task_id):
            raise TaskNotFoundError(str(task_id))
        logger.info("task.deleted", task_id=str(task_id))

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    async def get_task(self, task_id: uuid.UUID) -> Task:
        task = await self._task_repo.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(str(task_id))
        return task

    async def list_open_tasks(self) -> list[Task]:
        return await self._task_repo.list_open()

    async def list_all_tasks(self) -> list[Task]:
        return await self._task_repo.list_all()

    async def list_for_buyer(self, buyer_email: str) -> list[Task]:
        return await self._task_repo.list_by_buyer(buyer_email)
