"""Pydantic schemas for dashboard figures and health."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class WorkerStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    total_submissions: int = Field(alias="totalSubmissions")
    pending_submissions: int = Field(alias="pendingSubmissions")
    total_earnings: int = Field(alias="totalEarnings")


class BuyerStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    total_tasks: int = Field(alias="totalTasks")
    pending_workers: int = Field(alias="pendingWorkers")
    total_paid: Decimal = Field(alias="totalPaid")


class AdminStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    total_workers: int = Field(alias="totalWorkers")
    total_buyers: int = Field(alias="totalBuyers")
    total_coins: int = Field(alias="totalCoins")
    total_payments: Decimal = Field(alias="totalPayments")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    database: str = "unknown"
    redis: str = "unknown"
