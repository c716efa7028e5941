"""SQLAlchemy 2.0 ORM models for the EarnStack marketplace.

Six tables:
    1. users: Accounts and their coin balances.
    2. tasks: Funded units of work with a countdown of open slots.
    3. submissions: Worker claims against a task slot, pending review.
    4. withdrawals: Worker cash-out requests awaiting admin approval.
    5. notifications: Append-only inbox entries per recipient.
    6. payments: Coin purchases made by buyers.

Design decisions:
    - UUIDs as primary keys; email is the natural unique key for users.
    - Integer coins; Decimal for real-currency amounts.
    - Portable column types so the same models run on PostgreSQL and SQLite.
    - CHECK constraints back the ledger and capacity invariants at DB level.
    - submissions.task_id is indexed but not a foreign key: an admin may
      delete a task while its submissions are still on record.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from decimal import Decimal  # noqa: TC003 - needed at runtime by SQLAlchemy Mapped[]

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# ---------------------------------------------------------------------------
# 1. users
# ---------------------------------------------------------------------------
class User(Base):
    """A marketplace account. ``coin`` is only written by the ledger."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    role: Mapped[str] = mapped_column(String(10), nullable=False)
    coin: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Coin balance (written only through the ledger)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        CheckConstraint("coin >= 0", name="ck_user_coin_non_negative"),
        CheckConstraint(
            "role IN ('buyer', 'worker', 'admin')", name="ck_user_valid_role"
        ),
        Index("idx_user_role_coin", "role", "coin"),
    )

    def __repr__(self) -> str:
        return f"<User email={self.email} role={self.role} coin={self.coin}>"


# ---------------------------------------------------------------------------
# 2. tasks
# ---------------------------------------------------------------------------
class Task(Base):
    """A unit of work posted and pre-paid by a buyer."""

    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    buyer_email: Mapped[str] = mapped_column(String(320), nullable=False)
    buyer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    task_title: Mapped[str] = mapped_column(String(300), nullable=False)
    task_detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    submission_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    task_image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    completion_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    payable_amount: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Coins paid to each approved worker",
    )
    required_workers: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Remaining open worker slots (written only by TaskService)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        CheckConstraint("required_workers >= 0", name="ck_task_workers_non_negative"),
        CheckConstraint("payable_amount > 0", name="ck_task_positive_payable"),
        Index("idx_task_buyer", "buyer_email"),
        Index("idx_task_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Task id={self.id} payable={self.payable_amount} "
            f"open_slots={self.required_workers}>"
        )


# ---------------------------------------------------------------------------
# 3. submissions
# ---------------------------------------------------------------------------
class Submission(Base):
    """A worker's claim against one task slot."""

    __tablename__ = "submissions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    task_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    task_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    worker_email: Mapped[str] = mapped_column(String(320), nullable=False)
    worker_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    buyer_email: Mapped[str] = mapped_column(String(320), nullable=False)
    buyer_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    payable_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    submission_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="pending",
        comment="Review state (guarded by SubmissionStateMachine)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="ck_submission_valid_status",
        ),
        Index("idx_submission_task", "task_id"),
        Index("idx_submission_worker", "worker_email", "created_at"),
        Index("idx_submission_buyer_status", "buyer_email", "status"),
    )

    def __repr__(self) -> str:
        return f"<Submission id={self.id} task={self.task_id} status={self.status}>"


# ---------------------------------------------------------------------------
# 4. withdrawals
# ---------------------------------------------------------------------------
class Withdrawal(Base):
    """A worker's request to convert coins into external currency."""

    __tablename__ = "withdrawals"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    worker_email: Mapped[str] = mapped_column(String(320), nullable=False)
    worker_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    withdrawal_coin: Mapped[int] = mapped_column(Integer, nullable=False)
    withdrawal_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Payout in real currency",
    )
    payment_system: Mapped[str | None] = mapped_column(String(50), nullable=True)
    account_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="pending",
        comment="Approval state (guarded by WithdrawalStateMachine)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved')", name="ck_withdrawal_valid_status"
        ),
        CheckConstraint("withdrawal_coin > 0", name="ck_withdrawal_positive_coin"),
        Index("idx_withdrawal_worker", "worker_email"),
        Index("idx_withdrawal_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Withdrawal id={self.id} coin={self.withdrawal_coin} "
            f"status={self.status}>"
        )


# ---------------------------------------------------------------------------
# 5. notifications (Append-Only)
# ---------------------------------------------------------------------------
class Notification(Base):
    """Inbox entry emitted as a side effect of a workflow transition.

    Rows are never updated except for the ``unread`` flag.
    """

    __tablename__ = "notifications"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    to_email: Mapped[str] = mapped_column(String(320), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    action_route: Mapped[str] = mapped_column(String(200), nullable=False)
    unread: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (Index("idx_notification_recipient", "to_email", "created_at"),)

    def __repr__(self) -> str:
        return f"<Notification id={self.id} to={self.to_email} unread={self.unread}>"


# ---------------------------------------------------------------------------
# 6. payments (Append-Only)
# ---------------------------------------------------------------------------
class Payment(Base):
    """A coin purchase by a buyer."""

    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    coin: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    transaction_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        CheckConstraint("coin > 0", name="ck_payment_positive_coin"),
        Index("idx_payment_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<Payment id={self.id} email={self.email} coin={self.coin}>"
