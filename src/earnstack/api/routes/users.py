"""Account REST API routes.

Routes:
    POST   /users               : Register (buyer or worker) with signup coins
    GET    /users/{email}       : One user record
    GET    /users               : All users (admin)
    PATCH  /users/role/{email}  : Change a user's role (admin)
    DELETE /users/{user_id}     : Remove a user (admin)
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from earnstack.api.auth import Identity, get_current_identity, require_roles
from earnstack.api.deps import get_db_session
from earnstack.domain.enums import UserRole
from earnstack.schemas.users import (
    DeletedResponse,
    ModifiedResponse,
    RegisterUserRequest,
    RegisterUserResponse,
    UpdateRoleRequest,
    UserResponse,
)
from earnstack.services.ledger_service import LedgerService
from earnstack.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

admin_only = require_roles(UserRole.ADMIN)


@router.post(
    "",
    response_model=RegisterUserResponse,
    summary="Register a new account",
)
async def register_user(
    request: RegisterUserRequest,
    session: AsyncSession = Depends(get_db_session),
) -> RegisterUserResponse:
    """Create the account with its signup coins. Re-registering is a no-op."""
    svc = LedgerService(session)
    user, created = await svc.register(
        email=request.email,
        role=UserRole(request.role),
        name=request.name,
        image_url=request.image_url,
    )
    if not created:
        return RegisterUserResponse(
            acknowledged=False, message="User already exists", inserted_id=None
        )
    return RegisterUserResponse(acknowledged=True, inserted_id=user.email)


@router.get(
    "/{email}",
    response_model=UserResponse,
    summary="Get a user by email",
)
async def get_user(
    email: str,
    _: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await LedgerService(session).get_user(email)
    return UserResponse.model_validate(user)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List all users",
)
async def list_users(
    _: Identity = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
) -> list[UserResponse]:
    users = await UserService(session).list_users()
    return [UserResponse.model_validate(u) for u in users]


@router.patch(
    "/role/{email}",
    response_model=ModifiedResponse,
    summary="Change a user's role",
)
async def change_role(
    email: str,
    request: UpdateRoleRequest,
    _: Identity = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
) -> ModifiedResponse:
    await UserService(session).change_role(email, request.role)
    return ModifiedResponse(modified_count=1)


@router.delete(
    "/{user_id}",
    response_model=DeletedResponse,
    summary="Delete a user",
)
async def delete_user(
    user_id: uuid.UUID,
    _: Identity = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
) -> DeletedResponse:
    await UserService(session).delete_user(user_id)
    return DeletedResponse(deleted_count=1)
