"""Coin purchase routes.

Routes:
    POST /payments : Record a purchase and credit the coins
    GET  /payments : A buyer's purchase history

A client retrying a purchase may send an ``Idempotency-Key`` header. The key
is reserved in Redis before the purchase is recorded and released again if
recording or committing the purchase fails, so only a committed purchase
blocks a repeat.
"""

from __future__ import annotations

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, require_roles
from earnstack.api.deps import get_app_settings, get_db_session, get_redis_client
from earnstack.config import Settings
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import DuplicateOperationError
from earnstack.infrastructure.redis_client import (
    claim_idempotency_key,
    release_idempotency_key,
)
from earnstack.logging_config import get_logger
from earnstack.schemas.payments import (
    CreatePaymentResponse,
    PaymentResponse,
    PurchaseCoinsRequest,
)
from earnstack.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])
logger = get_logger(__name__)

buyer_only = require_roles(UserRole.BUYER)


@router.post(
    "",
    response_model=CreatePaymentResponse,
    summary="Purchase coins",
)
async def purchase_coins(
    request: PurchaseCoinsRequest,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    identity: Identity = Depends(buyer_only),
    session: AsyncSession = Depends(get_db_session),
    redis: aioredis.Redis | None = Depends(get_redis_client),
    settings: Settings = Depends(get_app_settings),
) -> CreatePaymentResponse:
    ensure_self(identity, request.email)

    key = f"payment:{request.email}:{idempotency_key}" if idempotency_key else None
    if key is not None:
        if redis is None:
            logger.warning("payment.idempotency_unavailable", email=request.email)
            key = None
        elif not await claim_idempotency_key(key):
            raise DuplicateOperationError(idempotency_key)

    svc = PaymentService(session, simulate=settings.payments_simulated)
    try:
        payment = await svc.purchase_coins(
            email=request.email,
            coin=request.coin,
            price=request.price,
            transaction_id=request.transaction_id,
        )
        # commit here so a failed commit also frees the key for a retry
        await session.commit()
    except Exception:
        if key is not None:
            await release_idempotency_key(key)
        raise

    return CreatePaymentResponse(payment_id=payment.id)


@router.get(
    "",
    response_model=list[PaymentResponse],
    summary="Purchase history",
)
async def payment_history(
    email: str = Query(...),
    identity: Identity = Depends(buyer_only),
    session: AsyncSession = Depends(get_db_session),
) -> list[PaymentResponse]:
    ensure_self(identity, email)
    items = await PaymentService(session).history(email)
    return [PaymentResponse.model_validate(p) for p in items]
