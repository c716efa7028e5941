"""Notification Service: append-only inbox per recipient.

Workflows only ever append; they never read notifications back. Recipients
list their inbox and may clear the unread flag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from earnstack.infrastructure.database.repositories import NotificationRepository
from earnstack.logging_config import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from earnstack.domain.enums import ActionRoute
    from earnstack.infrastructure.database.orm_models import Notification

logger = get_logger(__name__)


class NotificationService:
    """Writes and reads the notification inbox."""

    def __init__(self, session: AsyncSession) -> None:
        self._repo = NotificationRepository(session)

    async def append(
        self, to_email: str, message: str, action_route: ActionRoute | str
    ) -> Notification:
        """Record a notification. The recipient is not looked up."""
        notification = await self._repo.append(
            to_email=to_email,
            message=message,
            action_route=str(action_route),
        )
        logger.debug("notification.appended", to=to_email, route=str(action_route))
        return notification

    async def list_for(self, email: str) -> list[Notification]:
        """Return a recipient's notifications, newest first."""
        return await self._repo.list_for(email)

    async def mark_all_read(self, email: str) -> int:
        changed = await self._repo.mark_all_read(email)
        logger.info("notification.marked_read", to=email, count=changed)
        return changed
