"""Tests for WithdrawalService: requests and balance-checked approval."""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest

from earnstack.domain.enums import ActionRoute, UserRole
from earnstack.domain.exceptions import (
    InsufficientBalanceError,
    InvalidStateError,
    ValidationError,
    WithdrawalNotFoundError,
)
from earnstack.services.ledger_service import LedgerService
from earnstack.services.notification_service import NotificationService
from earnstack.services.withdrawal_service import WithdrawalService

RICH_WORKER = "rich-worker@example.com"


async def _request(session, coin: int, email: str = RICH_WORKER):
    withdrawal = await WithdrawalService(session).request(
        worker_email=email,
        withdrawal_coin=coin,
        withdrawal_amount=Decimal(coin) / 20,
        payment_system="bkash",
        account_number="01700000000",
        worker_name="Rita",
    )
    await session.commit()
    return withdrawal


class TestRequest:
    @pytest.mark.asyncio
    async def test_request_is_pending_and_does_not_debit(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 200)
        withdrawal = await _request(session, 100)

        assert withdrawal.status == "pending"
        assert withdrawal.withdrawal_amount == Decimal("5")
        assert await LedgerService(session).balance(RICH_WORKER) == 200

    @pytest.mark.asyncio
    async def test_request_beyond_balance_is_still_recorded(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 0)
        withdrawal = await _request(session, 500)
        assert withdrawal.status == "pending"

    @pytest.mark.asyncio
    async def test_non_positive_coin_rejected(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 50)
        with pytest.raises(ValidationError):
            await WithdrawalService(session).request(RICH_WORKER, 0, Decimal("1.00"))


class TestApprove:
    @pytest.mark.asyncio
    async def test_approve_debits_and_notifies(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 200)
        withdrawal = await _request(session, 120)

        approved = await WithdrawalService(session).approve(withdrawal.id)
        await session.commit()

        assert approved.status == "approved"
        assert await LedgerService(session).balance(RICH_WORKER) == 80
        inbox = await NotificationService(session).list_for(RICH_WORKER)
        assert [n.action_route for n in inbox] == [ActionRoute.WITHDRAWALS]

    @pytest.mark.asyncio
    async def test_insufficient_balance_leaves_request_pending(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 50)
        withdrawal = await _request(session, 80)

        with pytest.raises(InsufficientBalanceError):
            await WithdrawalService(session).approve(withdrawal.id)
        await session.rollback()

        svc = WithdrawalService(session)
        assert (await svc.list_for_worker(RICH_WORKER))[0].status == "pending"
        assert await LedgerService(session).balance(RICH_WORKER) == 50
        assert await NotificationService(session).list_for(RICH_WORKER) == []

    @pytest.mark.asyncio
    async def test_balance_spent_after_request_is_caught(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 100)
        withdrawal = await _request(session, 100)
        await LedgerService(session).debit(RICH_WORKER, 30)
        await session.commit()

        with pytest.raises(InsufficientBalanceError):
            await WithdrawalService(session).approve(withdrawal.id)

    @pytest.mark.asyncio
    async def test_second_approve_does_not_debit_twice(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 300)
        withdrawal = await _request(session, 100)
        svc = WithdrawalService(session)
        await svc.approve(withdrawal.id)
        await session.commit()

        with pytest.raises(InvalidStateError):
            await svc.approve(withdrawal.id)
        await session.rollback()
        assert await LedgerService(session).balance(RICH_WORKER) == 200

    @pytest.mark.asyncio
    async def test_unknown_withdrawal(self, session) -> None:
        with pytest.raises(WithdrawalNotFoundError):
            await WithdrawalService(session).approve(uuid.uuid4())


class TestListing:
    @pytest.mark.asyncio
    async def test_list_all_and_per_worker(self, session, make_user) -> None:
        await make_user(RICH_WORKER, UserRole.WORKER, 300)
        await make_user("other@example.com", UserRole.WORKER, 300)
        await _request(session, 10)
        await _request(session, 20, email="other@example.com")

        svc = WithdrawalService(session)
        assert len(await svc.list_all()) == 2
        mine = await svc.list_for_worker(RICH_WORKER)
        assert [w.withdrawal_coin for w in mine] == [10]
