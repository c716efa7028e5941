"""Pydantic schemas for withdrawals."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CreateWithdrawalRequest(BaseModel):
    """Request body for a worker cashing out coins."""

    model_config = ConfigDict(extra="ignore")

    worker_email: str = Field(..., min_length=3, max_length=320)
    worker_name: str | None = Field(default=None, max_length=200)
    withdrawal_coin: int = Field(..., gt=0)
    withdrawal_amount: Decimal = Field(..., gt=0, decimal_places=2)
    payment_system: str | None = Field(default=None, max_length=50)
    account_number: str | None = Field(default=None, max_length=100)


class WithdrawalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    worker_email: str
    worker_name: str | None
    withdrawal_coin: int
    withdrawal_amount: Decimal
    payment_system: str | None
    account_number: str | None
    status: str
    created_at: datetime = Field(alias="date")


class CreateWithdrawalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    withdrawal_id: uuid.UUID = Field(alias="withdrawalId")
