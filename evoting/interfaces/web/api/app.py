"""FastAPI application factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evoting import __version__
from evoting.common.logging import configure_logging, get_logger
from evoting.infrastructure.config.async_database import async_db
from evoting.infrastructure.config.sentry import init_sentry
from evoting.infrastructure.config.settings import Settings, get_settings
from evoting.infrastructure.external.smtp_notification_service import (
    SmtpNotificationService,
)
from evoting.interfaces.web.api.dependencies import get_notification_service
from evoting.interfaces.web.api.routers import (
    auth,
    ballots,
    elections,
    results,
    users,
    whitelist,
)


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("API starting", version=__version__)
    yield
    notifier = get_notification_service()
    if isinstance(notifier, SmtpNotificationService):
        await notifier.wait_pending()
    await async_db.dispose()
    logger.info("API stopped")


def create_app(config: Settings | None = None) -> FastAPI:
    """Build the API application.

    Args:
        config: Settings to use; defaults to the process-wide settings
    """
    config = config or get_settings()
    configure_logging(config.log_level, config.log_json)
    init_sentry(config)

    app = FastAPI(title="evoting", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(elections.router)
    app.include_router(whitelist.router)
    app.include_router(ballots.router)
    app.include_router(results.router)
    app.include_router(users.profile_router)
    app.include_router(users.router)

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
