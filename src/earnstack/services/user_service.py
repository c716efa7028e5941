"""User administration: listing accounts, changing roles, removing accounts."""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.domain.exceptions import UserNotFoundError
from earnstack.infrastructure.database.repositories import UserRepository
from earnstack.logging_config import get_logger

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from earnstack.domain.enums import UserRole
    from earnstack.infrastructure.database.orm_models import User

logger = get_logger(__name__)


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self._user_repo = UserRepository(session)

    async def list_users(self) -> list[User]:
        return await self._user_repo.list_all()

    async def change_role(self, email: str, role: UserRole) -> None:
        if not await self._user_repo.update_role(email, role):
            raise UserNotFoundError(email)
        logger.info("user.role_changed", email=email, role=role.value)

    async def delete_user(self, user_id: uuid.UUID) -> None:
        if not await self._user_repo.delete(user_id):
            raise UserNotFoundError(str(user_id))
        logger.info("user.deleted", user_id=str(user_id))
