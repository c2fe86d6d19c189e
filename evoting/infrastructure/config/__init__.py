"""Configuration package.

settings.py is the single source of configuration values.
"""

from evoting.infrastructure.config.async_database import (
    AsyncDatabase,
    async_db,
    get_async_session,
)
from evoting.infrastructure.config.sentry import init_sentry
from evoting.infrastructure.config.settings import (
    ENV_FILE_PATH,
    Settings,
    find_env_file,
    get_settings,
    reload_settings,
    settings,
)


__all__ = [
    # Settings
    "Settings",
    "settings",
    "get_settings",
    "reload_settings",
    "find_env_file",
    "ENV_FILE_PATH",
    # Async database
    "AsyncDatabase",
    "async_db",
    "get_async_session",
    # Sentry
    "init_sentry",
]
