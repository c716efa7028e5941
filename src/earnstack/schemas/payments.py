"""Pydantic schemas for coin purchases."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PurchaseCoinsRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str = Field(..., min_length=3, max_length=320)
    coin: int = Field(..., gt=0)
    price: Decimal = Field(..., ge=0, decimal_places=2)
    transaction_id: str | None = Field(
        default=None,
        max_length=100,
        description="Provider transaction id; generated when charges are simulated",
    )


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    coin: int
    price: Decimal
    transaction_id: str
    created_at: datetime


class CreatePaymentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    payment_id: uuid.UUID = Field(alias="paymentId")
