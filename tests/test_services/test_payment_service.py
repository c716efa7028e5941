"""Tests for PaymentService: recorded coin purchases."""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from earnstack.domain.exceptions import UserNotFoundError, ValidationError
from earnstack.services.ledger_service import LedgerService
from earnstack.services.payment_service import PaymentService


class TestPurchase:
    @pytest.mark.asyncio
    async def test_simulated_purchase_credits_buyer(self, session, seeded) -> None:
        buyer = seeded["buyer"].email
        payment = await PaymentService(session).purchase_coins(buyer, 100, Decimal("1.00"))
        await session.commit()

        assert payment.transaction_id.startswith("pi_sim_")
        assert await LedgerService(session).balance(buyer) == 200

    @pytest.mark.asyncio
    async def test_client_transaction_id_is_kept(self, session, seeded) -> None:
        payment = await PaymentService(session, simulate=False).purchase_coins(
            seeded["buyer"].email, 500, Decimal("4.00"), transaction_id="pi_3Nabc"
        )
        assert payment.transaction_id == "pi_3Nabc"

    @pytest.mark.asyncio
    async def test_live_mode_requires_transaction_id(self, session, seeded) -> None:
        with pytest.raises(ValidationError):
            await PaymentService(session, simulate=False).purchase_coins(
                seeded["buyer"].email, 10, Decimal("0.10")
            )

    @pytest.mark.asyncio
    async def test_reused_transaction_id_is_refused(self, session, seeded) -> None:
        buyer = seeded["buyer"].email
        svc = PaymentService(session)
        await svc.purchase_coins(buyer, 10, Decimal("0.10"), "pi_dup")
        await session.commit()

        with pytest.raises(IntegrityError):
            await svc.purchase_coins(buyer, 10, Decimal("0.10"), "pi_dup")
        await session.rollback()
        assert await LedgerService(session).balance(buyer) == 110

    @pytest.mark.asyncio
    async def test_unknown_buyer_is_not_recorded(self, session, seeded) -> None:
        svc = PaymentService(session)
        with pytest.raises(UserNotFoundError):
            await svc.purchase_coins("ghost@example.com", 10, Decimal("0.10"))
        await session.rollback()
        assert await svc.history("ghost@example.com") == []

    @pytest.mark.asyncio
    async def test_non_positive_coin(self, session, seeded) -> None:
        with pytest.raises(ValidationError):
            await PaymentService(session).purchase_coins(seeded["buyer"].email, 0, Decimal("1"))


class TestHistory:
    @pytest.mark.asyncio
    async def test_history_and_totals(self, session, seeded) -> None:
        svc = PaymentService(session)
        await svc.purchase_coins(seeded["buyer"].email, 10, Decimal("1.00"))
        await svc.purchase_coins(seeded["buyer"].email, 150, Decimal("10.00"))
        await svc.purchase_coins(seeded["admin"].email, 10, Decimal("1.00"))
        await session.commit()

        assert len(await svc.history(seeded["buyer"].email)) == 2
        assert await svc.total_paid(seeded["buyer"].email) == Decimal("11.00")
        assert await svc.total_paid() == Decimal("12.00")
        assert await svc.total_paid("nobody@example.com") == Decimal("0")
