"""Withdrawal Service: worker cash-out requests and admin approval.

Requests are recorded without looking at the balance. The balance check
happens at approval time through the ledger's conditional debit, because the
worker's coins may have changed in between.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.domain.enums import ActionRoute, WithdrawalStatus
from earnstack.domain.exceptions import (
    InvalidStateError,
    ValidationError,
    WithdrawalNotFoundError,
)
from earnstack.domain.state_machine import WithdrawalStateMachine, validate_transition
from earnstack.infrastructure.database.orm_models import Withdrawal
from earnstack.infrastructure.database.repositories import WithdrawalRepository
from earnstack.logging_config import get_logger
from earnstack.services.ledger_service import LedgerService
from earnstack.services.notification_service import NotificationService

if TYPE_CHECKING:
    import uuid
    from decimal import Decimal

    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class WithdrawalService:
    """Manages withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._withdrawal_repo = WithdrawalRepository(session)
        self._ledger = LedgerService(session)
        self._notifications = NotificationService(session)

    async def request(
        self,
        worker_email: str,
        withdrawal_coin: int,
        withdrawal_amount: Decimal,
        payment_system: str | None = None,
        account_number: str | None = None,
        worker_name: str | None = None,
    ) -> Withdrawal:
        """Record a pending withdrawal. The balance is not checked here."""
        if withdrawal_coin <= 0:
            raise ValidationError("withdrawal_coin must be positive")
        if withdrawal_amount <= 0:
            raise ValidationError("withdrawal_amount must be positive")

        withdrawal = Withdrawal(
            worker_email=worker_email,
            worker_name=worker_name,
            withdrawal_coin=withdrawal_coin,
            withdrawal_amount=withdrawal_amount,
            payment_system=payment_system,
            account_number=account_number,
            status=WithdrawalStatus.PENDING.value,
        )
        withdrawal = await self._withdrawal_repo.create(withdrawal)

        logger.info(
            "withdrawal.requested",
            withdrawal_id=str(withdrawal.id),
            worker=worker_email,
            coin=withdrawal_coin,
        )
        return withdrawal

    async def approve(self, withdrawal_id: uuid.UUID) -> Withdrawal:
        """Debit the worker and mark the withdrawal approved.

        Raises:
            WithdrawalNotFoundError: No such withdrawal.
            InvalidStateError: Already approved.
            InsufficientBalanceError: The worker no longer holds enough coins.
                Balance and status are left unchanged.
        """
        withdrawal = await self._get_withdrawal_or_raise(withdrawal_id)
        validate_transition(WithdrawalStateMachine, withdrawal.status, "approve")

        await self._ledger.debit(withdrawal.worker_email, withdrawal.withdrawal_coin)

        moved = await self._withdrawal_repo.transition_status(
            withdrawal.id, WithdrawalStatus.PENDING, WithdrawalStatus.APPROVED
        )
        if not moved:
            # a concurrent approval won; the caller's rollback undoes our debit
            raise InvalidStateError(withdrawal.status, "approve")
        withdrawal.status = WithdrawalStatus.APPROVED.value

        await self._notifications.append(
            to_email=withdrawal.worker_email,
            message=(
                f"Your withdrawal of {withdrawal.withdrawal_coin} coins "
                f"(${withdrawal.withdrawal_amount}) has been approved"
            ),
            action_route=ActionRoute.WITHDRAWALS,
        )

        logger.info(
            "withdrawal.approved",
            withdrawal_id=str(withdrawal_id),
            worker=withdrawal.worker_email,
            coin=withdrawal.withdrawal_coin,
        )
        return withdrawal

    async def list_all(self) -> list[Withdrawal]:
        return await self._withdrawal_repo.list_all()

    async def list_for_worker(self, worker_email: str) -> list[Withdrawal]:
        return await self._withdrawal_repo.list_for_worker(worker_email)

    async def _get_withdrawal_or_raise(self, withdrawal_id: uuid.UUID) -> Withdrawal:
        withdrawal = await self._withdrawal_repo.get_by_id(withdrawal_id)
        if withdrawal is None:
            raise WithdrawalNotFoundError(str(withdrawal_id))
        return withdrawal
