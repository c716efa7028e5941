"""Pydantic schemas for the notification inbox."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    to_email: str = Field(alias="toEmail")
    message: str
    action_route: str = Field(alias="actionRoute")
    created_at: datetime = Field(alias="time")
    unread: bool
