"""Database infrastructure: engine, ORM models, and repositories."""

from earnstack.infrastructure.database.engine import (
    close_db,
    init_db,
    unit_of_work,
)
from earnstack.infrastructure.database.orm_models import (
    Base,
    Notification,
    Payment,
    Submission,
    Task,
    User,
    Withdrawal,
)
from earnstack.infrastructure.database.repositories import (
    NotificationRepository,
    PaymentRepository,
    SubmissionRepository,
    TaskRepository,
    UserRepository,
    WithdrawalRepository,
)

__all__ = [
    "Base",
    "Notification",
    "Payment",
    "Submission",
    "Task",
    "User",
    "Withdrawal",
    "NotificationRepository",
    "PaymentRepository",
    "SubmissionRepository",
    "TaskRepository",
    "UserRepository",
    "WithdrawalRepository",
    "unit_of_work",
    "init_db",
    "close_db",
]
