"""Ledger Service: the only writer of user coin balances.

Every balance change in the system goes through ``credit`` or ``debit``.
Both are single conditional UPDATE statements, so two requests racing on the
same account cannot push its balance below zero. Neither commits: the caller's
session decides whether the change survives.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from earnstack.config import get_settings
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import (
    InsufficientBalanceError,
    UserNotFoundError,
    ValidationError,
)
from earnstack.infrastructure.database.orm_models import User
from earnstack.infrastructure.database.repositories import UserRepository
from earnstack.logging_config import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class LedgerService:
    """Owns accounts and their coin balances."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._user_repo = UserRepository(session)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register(
        self,
        email: str,
        role: UserRole,
        name: str | None = None,
        image_url: str | None = None,
    ) -> tuple[User, bool]:
        """Create an account with its signup coins, or return the existing one.

        Returns:
            ``(user, created)``. Re-registering an email is not an error; the
            stored record is returned untouched and ``created`` is False.
        """
        existing = await self._user_repo.get_by_email(email)
        if existing is not None:
            logger.info("ledger.register_existing", email=email)
            return existing, False

        user = User(
            email=email,
            role=role.value,
            name=name,
            image_url=image_url,
            coin=self._signup_coins(role),
        )
        try:
            async with self._session.begin_nested():
                user = await self._user_repo.create(user)
        except IntegrityError:
            # a concurrent first registration committed the email after our read
            existing = await self._user_repo.get_by_email(email)
            if existing is None:
                raise
            logger.info("ledger.register_existing", email=email, raced=True)
            return existing, False

        logger.info("ledger.registered", email=email, role=role.value, coin=user.coin)
        return user, True

    # ------------------------------------------------------------------
    # Balance adjustments
    # ------------------------------------------------------------------

    async def credit(self, email: str, amount: int) -> int:
        """Add coins to an account. Returns the new balance."""
        self._require_positive(amount)
        balance = await self._user_repo.credit(email, amount)
        if balance is None:
            raise UserNotFoundError(email)
        logger.info("ledger.credited", email=email, amount=amount, balance=balance)
        return balance

    async def debit(self, email: str, amount: int) -> int:
        """Remove coins from an account if it can cover them. Returns the new balance.

        Raises:
            InsufficientBalanceError: The balance is lower than ``amount``.
                Nothing is written.
            UserNotFoundError: No account with that email.
        """
        self._require_positive(amount)
        balance = await self._user_repo.debit_if_sufficient(email, amount)
        if balance is None:
            user = await self._user_repo.get_by_email(email)
            if user is None:
                raise UserNotFoundError(email)
            logger.info(
                "ledger.debit_declined",
                email=email,
                amount=amount,
                available=user.coin,
            )
            raise InsufficientBalanceError(email, required=amount, available=user.coin)
        logger.info("ledger.debited", email=email, amount=amount, balance=balance)
        return balance

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    async def get_user(self, email: str) -> User:
        user = await self._user_repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    async def balance(self, email: str) -> int:
        return (await self.get_user(email)).coin

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _signup_coins(role: UserRole) -> int:
        settings = get_settings()
        if role == UserRole.BUYER:
            return settings.buyer_signup_coins
        return settings.worker_signup_coins

    @staticmethod
    def _require_positive(amount: int) -> None:
        if amount <= 0:
            raise ValidationError(f"Coin amount must be positive, got {amount}")
