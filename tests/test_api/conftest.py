"""HTTP-level fixtures: the FastAPI app bound to the per-test database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from earnstack.api.auth import create_access_token
from earnstack.api.deps import get_db_session
from earnstack.infrastructure.database.engine import unit_of_work
from earnstack.main import create_app

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI


@pytest.fixture
def app(session_factory) -> FastAPI:
    application = create_app()

    async def _test_session():
        async with unit_of_work(session_factory) as session:
            yield session

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def auth():
    """``auth(email)`` -> Authorization header for that email."""

    def _headers(email: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(email)}"}

    return _headers
