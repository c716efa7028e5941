"""Pydantic schemas for submissions."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreateSubmissionRequest(BaseModel):
    """Request body for a worker submitting work against a task."""

    model_config = ConfigDict(extra="ignore")

    task_id: uuid.UUID
    worker_email: str = Field(..., min_length=3, max_length=320)
    worker_name: str | None = Field(default=None, max_length=200)
    buyer_email: str = Field(..., min_length=3, max_length=320)
    payable_amount: int = Field(..., gt=0)
    submission_details: str | None = Field(default=None, max_length=10_000)


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    task_id: uuid.UUID
    task_title: str | None
    worker_email: str
    worker_name: str | None
    buyer_email: str
    buyer_name: str | None
    payable_amount: int
    submission_details: str | None
    status: str
    created_at: datetime


class CreateSubmissionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    submission_id: uuid.UUID = Field(alias="submissionId")


class SubmissionPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    submissions: list[SubmissionResponse]
    total_count: int = Field(alias="totalCount")


class SuccessResponse(BaseModel):
    success: bool = True
