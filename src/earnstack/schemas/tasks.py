"""Pydantic schemas for tasks."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class TaskDraft(BaseModel):
    """The task as the buyer fills it in."""

    model_config = ConfigDict(extra="ignore")

    task_title: str = Field(..., min_length=1, max_length=300)
    task_detail: str | None = Field(default=None, max_length=10_000)
    submission_info: str | None = Field(default=None, max_length=2_000)
    task_image_url: str | None = Field(default=None, max_length=1000)
    completion_date: datetime | None = None
    payable_amount: int = Field(..., gt=0, description="Coins paid per approved worker")
    required_workers: int = Field(..., gt=0, description="Number of worker slots")
    buyer_email: str = Field(..., min_length=3, max_length=320)
    buyer_name: str | None = Field(default=None, max_length=200)


class CreateTaskRequest(BaseModel):
    """Request body for posting a task.

    ``totalPayable`` is optional; when sent it must equal the reservation the
    server computes, so a stale client total is rejected rather than trusted.
    """

    model_config = ConfigDict(populate_by_name=True)

    task: TaskDraft
    total_payable: int | None = Field(default=None, alias="totalPayable", gt=0)

    @model_validator(mode="after")
    def _total_matches(self) -> CreateTaskRequest:
        expected = self.task.payable_amount * self.task.required_workers
        if self.total_payable is not None and self.total_payable != expected:
            raise ValueError(
                f"totalPayable {self.total_payable} does not equal "
                f"payable_amount x required_workers ({expected})"
            )
        return self


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    buyer_email: str
    buyer_name: str | None
    task_title: str
    task_detail: str | None
    submission_info: str | None
    task_image_url: str | None
    completion_date: datetime | None
    payable_amount: int
    required_workers: int
    created_at: datetime


class CreateTaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    task_id: uuid.UUID = Field(alias="taskId")


class SoftErrorResponse(BaseModel):
    """A declined operation reported with HTTP 200 for existing clients."""

    error: bool = True
    message: str
