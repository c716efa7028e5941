"""Tests for user administration and the notification inbox."""

from __future__ import annotations

import uuid

import pytest

from earnstack.domain.enums import ActionRoute, UserRole
from earnstack.domain.exceptions import UserNotFoundError
from earnstack.services.ledger_service import LedgerService
from earnstack.services.notification_service import NotificationService
from earnstack.services.user_service import UserService


class TestUserAdministration:
    @pytest.mark.asyncio
    async def test_list_users(self, session, seeded) -> None:
        users = await UserService(session).list_users()
        assert {u.email for u in users} == {u.email for u in seeded.values()}

    @pytest.mark.asyncio
    async def test_change_role(self, session, seeded) -> None:
        await UserService(session).change_role(seeded["worker"].email, UserRole.BUYER)
        await session.commit()
        user = await LedgerService(session).get_user(seeded["worker"].email)
        assert user.role == "buyer"

    @pytest.mark.asyncio
    async def test_change_role_of_missing_user(self, session, seeded) -> None:
        with pytest.raises(UserNotFoundError):
            await UserService(session).change_role("ghost@example.com", UserRole.ADMIN)

    @pytest.mark.asyncio
    async def test_delete_user(self, session, seeded) -> None:
        svc = UserService(session)
        await svc.delete_user(seeded["worker2"].id)
        await session.commit()

        with pytest.raises(UserNotFoundError):
            await LedgerService(session).get_user(seeded["worker2"].email)
        with pytest.raises(UserNotFoundError):
            await svc.delete_user(uuid.uuid4())


class TestNotifications:
    @pytest.mark.asyncio
    async def test_append_list_and_mark_read(self, session) -> None:
        svc = NotificationService(session)
        await svc.append("ann@example.com", "first", ActionRoute.WORKER_HOME)
        await svc.append("ann@example.com", "second", ActionRoute.MY_SUBMISSIONS)
        await svc.append("bob@example.com", "other", ActionRoute.BUYER_HOME)
        await session.commit()

        inbox = await svc.list_for("ann@example.com")
        assert {n.message for n in inbox} == {"first", "second"}
        assert all(n.unread for n in inbox)

        assert await svc.mark_all_read("ann@example.com") == 2
        await session.commit()
        assert not any(n.unread for n in await svc.list_for("ann@example.com"))
        assert (await svc.list_for("bob@example.com"))[0].unread is True

    @pytest.mark.asyncio
    async def test_recipient_need_not_exist(self, session) -> None:
        note = await NotificationService(session).append(
            "nobody@example.com", "hello", ActionRoute.BUYER_HOME
        )
        assert note.to_email == "nobody@example.com"
        assert note.action_route == "/dashboard/buyer-home"
