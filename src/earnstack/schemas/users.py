"""Pydantic schemas for accounts and tokens."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from earnstack.domain.enums import UserRole

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class TokenRequest(BaseModel):
    """Identity payload exchanged for a bearer token.

    Extra profile fields sent by the client are accepted and ignored.
    """

    model_config = ConfigDict(extra="ignore")

    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")


class RegisterUserRequest(BaseModel):
    """Request body for first-time registration."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    role: Literal["buyer", "worker"] = Field(
        ...,
        description="Self-registration may only pick buyer or worker",
    )
    name: str | None = Field(default=None, max_length=200)
    image_url: str | None = Field(default=None, alias="image", max_length=1000)


class UpdateRoleRequest(BaseModel):
    role: UserRole


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class TokenResponse(BaseModel):
    token: str


class RegisterUserResponse(BaseModel):
    """Mirrors the insert result the web client already understands."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = True
    message: str | None = None
    inserted_id: str | None = Field(default=None, alias="insertedId")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID
    email: str
    name: str | None
    image_url: str | None = Field(alias="image")
    role: str
    coin: int
    created_at: datetime


class ModifiedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    modified_count: int = Field(alias="modifiedCount")


class DeletedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    deleted_count: int = Field(alias="deletedCount")
