"""Application services: use case orchestration."""

from earnstack.services.ledger_service import LedgerService
from earnstack.services.notification_service import NotificationService
from earnstack.services.payment_service import PaymentService
from earnstack.services.stats_service import StatsService
from earnstack.services.submission_service import SubmissionService
from earnstack.services.task_service import TaskService
from earnstack.services.user_service import UserService
from earnstack.services.withdrawal_service import WithdrawalService

__all__ = [
    "LedgerService",
    "NotificationService",
    "PaymentService",
    "StatsService",
    "SubmissionService",
    "TaskService",
    "UserService",
    "WithdrawalService",
]
