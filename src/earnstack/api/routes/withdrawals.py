"""Withdrawal REST API routes.

Routes:
    POST  /withdraw                : Worker requests a cash-out
    GET   /withdrawals             : All withdrawal requests (admin)
    GET   /worker/withdrawals      : The calling worker's requests
    PATCH /withdraw/approve/{id}   : Admin approves; the worker is debited
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, ensure_self, require_roles
from earnstack.api.deps import get_db_session
from earnstack.domain.enums import UserRole
from earnstack.domain.exceptions import InsufficientBalanceError
from earnstack.logging_config import get_logger
from earnstack.schemas.tasks import SoftErrorResponse
from earnstack.schemas.withdrawals import (
    CreateWithdrawalRequest,
    CreateWithdrawalResponse,
    WithdrawalResponse,
)
from earnstack.services.withdrawal_service import WithdrawalService

router = APIRouter(tags=["Withdrawals"])
logger = get_logger(__name__)

admin_only = require_roles(UserRole.ADMIN)
worker_only = require_roles(UserRole.WORKER)


@router.post(
    "/withdraw",
    response_model=CreateWithdrawalResponse,
    summary="Request a withdrawal",
)
async def request_withdrawal(
    request: CreateWithdrawalRequest,
    identity: Identity = Depends(worker_only),
    session: AsyncSession = Depends(get_db_session),
) -> CreateWithdrawalResponse:
    """Record a pending request. Coins are checked and debited on approval."""
    ensure_self(identity, request.worker_email)
    withdrawal = await WithdrawalService(session).request(
        worker_email=request.worker_email,
        withdrawal_coin=request.withdrawal_coin,
        withdrawal_amount=request.withdrawal_amount,
        payment_system=request.payment_system,
        account_number=request.account_number,
        worker_name=request.worker_name,
    )
    return CreateWithdrawalResponse(withdrawal_id=withdrawal.id)


@router.get(
    "/withdrawals",
    response_model=list[WithdrawalResponse],
    summary="List all withdrawal requests",
)
async def list_withdrawals(
    _: Identity = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
) -> list[WithdrawalResponse]:
    items = await WithdrawalService(session).list_all()
    return [WithdrawalResponse.model_validate(w) for w in items]


@router.get(
    "/worker/withdrawals",
    response_model=list[WithdrawalResponse],
    summary="List a worker's own withdrawal requests",
)
async def list_worker_withdrawals(
    email: str = Query(...),
    identity: Identity = Depends(worker_only),
    session: AsyncSession = Depends(get_db_session),
) -> list[WithdrawalResponse]:
    ensure_self(identity, email)
    items = await WithdrawalService(session).list_for_worker(email)
    return [WithdrawalResponse.model_validate(w) for w in items]


@router.patch(
    "/withdraw/approve/{withdrawal_id}",
    response_model=WithdrawalResponse | SoftErrorResponse,
    summary="Approve a withdrawal",
)
async def approve_withdrawal(
    withdrawal_id: uuid.UUID,
    _: Identity = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
) -> WithdrawalResponse | SoftErrorResponse:
    """Debit the worker and mark the request approved.

    A worker whose balance dropped below the requested coins gets a 200 with
    ``{error, message}``; the request stays pending.
    """
    try:
        withdrawal = await WithdrawalService(session).approve(withdrawal_id)
    except InsufficientBalanceError as exc:
        await session.rollback()
        logger.info(
            "withdrawal.approve_declined",
            withdrawal_id=str(withdrawal_id),
            available=exc.available,
        )
        return SoftErrorResponse(message="Insufficient coins")

    return WithdrawalResponse.model_validate(withdrawal)
