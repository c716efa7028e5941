"""FastAPI application entry point for the EarnStack marketplace.

Lifecycle:
    1. Startup: Initialize logging, database, Redis, create tables (dev mode).
    2. Running: Serve the REST API on a single Uvicorn process.
    3. Shutdown: Close database and Redis connections gracefully.

Run with:
    uvicorn earnstack.main:app --reload --host 0.0.0.0 --port 5000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from earnstack.config import get_settings
from earnstack.logging_config import get_logger, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle."""
    settings = get_settings()

    # 1. Setup structured logging
    setup_logging(
        log_level=settings.app_log_level,
        json_logs=not settings.is_development,
    )
    logger = get_logger(__name__)
    logger.info(
        "app.starting",
        env=settings.app_env,
        debug=settings.app_debug,
    )

    # 2. Initialize database
    from earnstack.infrastructure.database.engine import close_db, init_db

    await init_db()

    # 3. Initialize Redis; purchases still work without it, minus idempotency keys
    from earnstack.infrastructure.redis_client import close_redis, init_redis

    try:
        await init_redis()
    except Exception as exc:
        logger.warning("app.redis_unavailable", error=str(exc))

    logger.info("app.started", host=settings.app_host, port=settings.app_port)

    yield

    # Shutdown
    logger.info("app.shutting_down")
    await close_db()
    await close_redis()
    logger.info("app.stopped")


def create_app() -> FastAPI:
    """Application factory: creates and configures the FastAPI app."""
    settings = get_settings()

    app = FastAPI(
        title="EarnStack",
        description=(
            "Micro-task marketplace: buyers post paid tasks, workers submit "
            "work and earn coins, admins approve cash-outs."
        ),
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.app_debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    # --- Middleware ---
    from earnstack.api.middleware import setup_middleware

    setup_middleware(app)

    # --- REST API Routes ---
    from earnstack.api.routes.auth import router as auth_router
    from earnstack.api.routes.health import router as health_router
    from earnstack.api.routes.notifications import router as notifications_router
    from earnstack.api.routes.payments import router as payments_router
    from earnstack.api.routes.stats import router as stats_router
    from earnstack.api.routes.submissions import router as submissions_router
    from earnstack.api.routes.tasks import router as tasks_router
    from earnstack.api.routes.users import router as users_router
    from earnstack.api.routes.withdrawals import router as withdrawals_router

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    app.include_router(submissions_router)
    app.include_router(withdrawals_router)
    app.include_router(notifications_router)
    app.include_router(payments_router)
    app.include_router(stats_router)

    return app


# The app instance used by Uvicorn
app = create_app()
