"""Repository classes for database access.

Repositories encapsulate all SQL queries and provide a clean interface
to the service layer. They accept an AsyncSession and never manage
their own transactions (that's the caller's responsibility).

Counters and statuses that several requests may race on are changed with
single conditional UPDATE ... RETURNING statements. A ``None`` result means
the guard in the WHERE clause did not hold and nothing was written:

    UserRepository.debit_if_sufficient      coin = coin - n  WHERE coin >= n
    TaskRepository.decrement_if_positive    slots = slots - 1 WHERE slots > 0
    *Repository.transition_status           status = new     WHERE status = old

Those statements bypass the identity map, so single-row reads use
``populate_existing`` to always reflect the committed row.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select, update

from earnstack.infrastructure.database.orm_models import (
    Notification,
    Payment,
    Submission,
    Task,
    User,
    Withdrawal,
)

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal

    from sqlalchemy.ext.asyncio import AsyncSession

    from earnstack.domain.enums import SubmissionStatus, UserRole, WithdrawalStatus

_NO_SYNC = {"synchronize_session": False}
_FRESH = {"populate_existing": True}


class UserRepository:
    """Data access for accounts and coin balances."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, user: User) -> User:
        """Insert a new user."""
        self._session.add(user)
        await self._session.flush()
        return user

    async def get_by_email(self, email: str) -> User | None:
        result = await self._session.execute(
            select(User).where(User.email == email).execution_options(**_FRESH)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        result = await self._session.execute(
            select(User).where(User.id == user_id).execution_options(**_FRESH)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[User]:
        result = await self._session.execute(
            select(User).order_by(User.created_at.desc()).execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def top_by_coin(self, role: UserRole, limit: int) -> list[User]:
        """Richest accounts of a role, highest balance first."""
        result = await self._session.execute(
            select(User)
            .where(User.role == role.value)
            .order_by(User.coin.desc(), User.created_at.asc())
            .limit(limit)
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def count_by_role(self, role: UserRole) -> int:
        result = await self._session.execute(
            select(func.count()).select_from(User).where(User.role == role.value)
        )
        return int(result.scalar_one())

    async def total_coins(self) -> int:
        result = await self._session.execute(select(func.coalesce(func.sum(User.coin), 0)))
        return int(result.scalar_one())

    async def update_role(self, email: str, role: UserRole) -> bool:
        """Set a user's role. Returns False when no such user exists."""
        result = await self._session.execute(
            update(User)
            .where(User.email == email)
            .values(role=role.value)
            .returning(User.id)
            .execution_options(**_NO_SYNC)
        )
        return result.first() is not None

    async def delete(self, user_id: uuid.UUID) -> bool:
        result = await self._session.execute(
            delete(User)
            .where(User.id == user_id)
            .returning(User.id)
            .execution_options(**_NO_SYNC)
        )
        return result.first() is not None

    async def debit_if_sufficient(self, email: str, amount: int) -> int | None:
        """Atomically subtract ``amount`` if the balance covers it.

        Returns the new balance, or None if the user is missing or short.
        """
        result = await self._session.execute(
            update(User)
            .where(User.email == email, User.coin >= amount)
            .values(coin=User.coin - amount)
            .returning(User.coin)
            .execution_options(**_NO_SYNC)
        )
        return result.scalar_one_or_none()

    async def credit(self, email: str, amount: int) -> int | None:
        """Atomically add ``amount``. Returns the new balance, or None if missing."""
        result = await self._session.execute(
            update(User)
            .where(User.email == email)
            .values(coin=User.coin + amount)
            .returning(User.coin)
            .execution_options(**_NO_SYNC)
        )
        return result.scalar_one_or_none()


class TaskRepository:
    """Data access for tasks and their open-slot counter."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, task: Task) -> Task:
        self._session.add(task)
        await self._session.flush()
        return task

    async def get_by_id(self, task_id: uuid.UUID) -> Task | None:
        result = await self._session.execute(
            select(Task).where(Task.id == task_id).execution_options(**_FRESH)
        )
        return result.scalar_one_or_none()

    async def list_open(self) -> list[Task]:
        """Tasks with at least one open slot, newest first."""
        result = await self._session.execute(
            select(Task)
            .where(Task.required_workers > 0)
            .order_by(Task.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[Task]:
        result = await self._session.execute(
            select(Task).order_by(Task.created_at.desc()).execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def list_by_buyer(self, buyer_email: str) -> list[Task]:
        result = await self._session.execute(
            select(Task)
            .where(Task.buyer_email == buyer_email)
            .order_by(Task.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def buyer_summary(self, buyer_email: str) -> tuple[int, int]:
        """Return (task count, open slots summed over the buyer's tasks)."""
        result = await self._session.execute(
            select(
                func.count(Task.id),
                func.coalesce(func.sum(Task.required_workers), 0),
            ).where(Task.buyer_email == buyer_email)
        )
        count, open_slots = result.one()
        return int(count), int(open_slots)

    async def decrement_if_positive(self, task_id: uuid.UUID) -> int | None:
        """Atomically take one open slot. Returns the remaining count or None."""
        result = await self._session.execute(
            update(Task)
            .where(Task.id == task_id, Task.required_workers > 0)
            .values(required_workers=Task.required_workers - 1)
            .returning(Task.required_workers)
            .execution_options(**_NO_SYNC)
        )
        return result.scalar_one_or_none()

    async def increment(self, task_id: uuid.UUID) -> int | None:
        """Atomically give back one slot. Returns the new count or None if missing."""
        result = await self._session.execute(
            update(Task)
            .where(Task.id == task_id)
            .values(required_workers=Task.required_workers + 1)
            .returning(Task.required_workers)
            .execution_options(**_NO_SYNC)
        )
        return result.scalar_one_or_none()

    async def delete(self, task_id: uuid.UUID) -> bool:
        result = await self._session.execute(
            delete(Task)
            .where(Task.id == task_id)
            .returning(Task.id)
            .execution_options(**_NO_SYNC)
        )
        return result.first() is not None


class SubmissionRepository:
    """Data access for worker submissions."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, submission: Submission) -> Submission:
        self._session.add(submission)
        await self._session.flush()
        return submission

    async def get_by_id(self, submission_id: uuid.UUID) -> Submission | None:
        result = await self._session.execute(
            select(Submission)
            .where(Submission.id == submission_id)
            .execution_options(**_FRESH)
        )
        return result.scalar_one_or_none()

    async def list_for_worker(
        self, worker_email: str, offset: int, limit: int
    ) -> list[Submission]:
        """One page of a worker's submissions, newest first."""
        result = await self._session.execute(
            select(Submission)
            .where(Submission.worker_email == worker_email)
            .order_by(Submission.created_at.desc())
            .offset(offset)
            .limit(limit)
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def count_for_worker(self, worker_email: str) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(Submission)
            .where(Submission.worker_email == worker_email)
        )
        return int(result.scalar_one())

    async def list_for_buyer(
        self, buyer_email: str, status: SubmissionStatus
    ) -> list[Submission]:
        result = await self._session.execute(
            select(Submission)
            .where(
                Submission.buyer_email == buyer_email,
                Submission.status == status.value,
            )
            .order_by(Submission.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def worker_summary(self, worker_email: str) -> tuple[int, int, int]:
        """Return (total, pending count, coins earned from approved) for a worker."""
        pending = func.count(Submission.id).filter(Submission.status == "pending")
        earned = func.sum(Submission.payable_amount).filter(
            Submission.status == "approved"
        )
        result = await self._session.execute(
            select(
                func.count(Submission.id),
                func.coalesce(pending, 0),
                func.coalesce(earned, 0),
            ).where(Submission.worker_email == worker_email)
        )
        total, pending_count, earnings = result.one()
        return int(total), int(pending_count), int(earnings)

    async def transition_status(
        self,
        submission_id: uuid.UUID,
        from_status: SubmissionStatus,
        to_status: SubmissionStatus,
    ) -> bool:
        """Move a submission between statuses only if it is still in ``from_status``."""
        result = await self._session.execute(
            update(Submission)
            .where(
                Submission.id == submission_id,
                Submission.status == from_status.value,
            )
            .values(status=to_status.value)
            .returning(Submission.id)
            .execution_options(**_NO_SYNC)
        )
        return result.first() is not None


class WithdrawalRepository:
    """Data access for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, withdrawal: Withdrawal) -> Withdrawal:
        self._session.add(withdrawal)
        await self._session.flush()
        return withdrawal

    async def get_by_id(self, withdrawal_id: uuid.UUID) -> Withdrawal | None:
        result = await self._session.execute(
            select(Withdrawal)
            .where(Withdrawal.id == withdrawal_id)
            .execution_options(**_FRESH)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Withdrawal]:
        result = await self._session.execute(
            select(Withdrawal)
            .order_by(Withdrawal.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def list_for_worker(self, worker_email: str) -> list[Withdrawal]:
        result = await self._session.execute(
            select(Withdrawal)
            .where(Withdrawal.worker_email == worker_email)
            .order_by(Withdrawal.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def transition_status(
        self,
        withdrawal_id: uuid.UUID,
        from_status: WithdrawalStatus,
        to_status: WithdrawalStatus,
    ) -> bool:
        result = await self._session.execute(
            update(Withdrawal)
            .where(
                Withdrawal.id == withdrawal_id,
                Withdrawal.status == from_status.value,
            )
            .values(status=to_status.value)
            .returning(Withdrawal.id)
            .execution_options(**_NO_SYNC)
        )
        return result.first() is not None


class NotificationRepository:
    """Data access for the append-only notification inbox."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, to_email: str, message: str, action_route: str) -> Notification:
        """Insert a notification. This is the only way rows are created."""
        notification = Notification(
            to_email=to_email,
            message=message,
            action_route=action_route,
        )
        self._session.add(notification)
        await self._session.flush()
        return notification

    async def list_for(self, to_email: str) -> list[Notification]:
        result = await self._session.execute(
            select(Notification)
            .where(Notification.to_email == to_email)
            .order_by(Notification.created_at.desc())
            .execution_options(**_FRESH)
        )
        return list(result.scalars().all())

    async def mark_all_read(self, to_email: str) -> int:
        """Clear the unread flag for a recipient. Returns the number of rows changed."""
        result = await self._session.execute(
            update(Notification)
            .where(Notification.to_email == to_email, Notification.unread.is_(True))
            .values(unread=False)
            .returning(Notification.id)
            .execution_options(**_NO_SYNC)
        )
        return len(result.all())


class PaymentRepository:
    """Data access for coin purchases."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payment: Payment) -> Payment:
        self._session.add(payment)
        await self._session.flush()
        return payment

    async def list_for_email(self, email: str) -> list[Payment]:
        result = await self._session.execute(
            select(Payment)
            .where(Payment.email == email)
            .order_by(Payment.created_at.desc())
        )
        return list(result.scalars().all())

    async def total_price(self, email: str | None = None) -> Decimal:
        """Sum of purchase prices, for one buyer or for the whole platform."""
        stmt = select(func.coalesce(func.sum(Payment.price), 0))
        if email is not None:
            stmt = stmt.where(Payment.email == email)
        result = await self._session.execute(stmt)
        return result.scalar_one()
