"""Payment Service: buyers purchasing coins.

The card charge itself happens client-side; the client reports the resulting
transaction id and this service records the purchase and credits the coins.

In simulation mode a missing transaction id is replaced by a generated one,
so purchases can be exercised without a payment provider.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from earnstack.domain.exceptions import ValidationError
from earnstack.infrastructure.database.orm_models import Payment
from earnstack.infrastructure.database.repositories import PaymentRepository
from earnstack.logging_config import get_logger
from earnstack.services.ledger_service import LedgerService

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class PaymentService:
    """Records coin purchases and credits the buyer."""

    def __init__(self, session: AsyncSession, simulate: bool = True) -> None:
        """Initialize payment service.

        Args:
            session: The request's database session.
            simulate: If True, generate a fake transaction id when the client
                did not send one. If False, a transaction id is mandatory.
        """
        self._simulate = simulate
        self._payment_repo = PaymentRepository(session)
        self._ledger = LedgerService(session)

    async def purchase_coins(
        self,
        email: str,
        coin: int,
        price: Decimal,
        transaction_id: str | None = None,
    ) -> Payment:
        """Record a purchase and credit ``coin`` to the buyer in one unit of work."""
        if coin <= 0:
            raise ValidationError("coin must be positive")
        if price < 0:
            raise ValidationError("price must not be negative")

        if not transaction_id:
            if not self._simulate:
                raise ValidationError("transaction_id is required")
            transaction_id = "pi_sim_" + uuid.uuid4().hex
            logger.info("payment.charge_simulated", email=email, transaction_id=transaction_id)

        payment = Payment(
            email=email,
            coin=coin,
            price=price,
            transaction_id=transaction_id,
        )
        payment = await self._payment_repo.create(payment)
        balance = await self._ledger.credit(email, coin)

        logger.info(
            "payment.recorded",
            payment_id=str(payment.id),
            email=email,
            coin=coin,
            price=str(price),
            balance=balance,
        )
        return payment

    async def history(self, email: str) -> list[Payment]:
        return await self._payment_repo.list_for_email(email)

    async def total_paid(self, email: str | None = None) -> Decimal:
        return Decimal(str(await self._payment_repo.total_price(email)))
