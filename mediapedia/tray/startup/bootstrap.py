from __future__ import annotations

import logging
import os
import sys

from mediapedia.core.config import Config
from mediapedia.core.storage import MIGRATIONS, MigrationLog, MigrationRunner, database_path_from_url
from mediapedia.core.utils.exceptions import MigrationFailure


logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging for the app.

    If callers already configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if os.environ.get("MEDIAPEDIA_DEBUG") else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def log_startup_diagnostics_if_debug(config: Config) -> None:
    """Log resolved paths and settings when MEDIAPEDIA_DEBUG is enabled.

    Best-effort only; must never fail app startup.
    """

    if not os.environ.get("MEDIAPEDIA_DEBUG"):
        return

    try:
        logger.debug("Config file: %s", config.CONFIG_FILE)
        logger.debug("Data dir: %s", config.data_dir)
        logger.debug("Database URL: %s", config.database_url)
        logger.debug("Keychain service: %s", config.service_name)
    except Exception as exc:
        logger.debug("Startup diagnostics unavailable: %s", exc)


def run_migrations(config: Config, migrations: MigrationLog = MIGRATIONS) -> list[int]:
    """Bring the catalog database to the latest schema.

    Raises `MigrationFailure`; callers treat it as fatal.
    """

    try:
        path = database_path_from_url(config.database_url, config.data_dir)
    except ValueError as exc:
        raise MigrationFailure(migrations.latest_version, str(exc)) from exc

    return MigrationRunner(path, migrations).run()


def run_migrations_or_exit(config: Config, migrations: MigrationLog = MIGRATIONS) -> list[int]:
    """Run migrations or exit with code 1; there is no degraded startup."""

    try:
        return run_migrations(config, migrations)
    except MigrationFailure as exc:
        logger.error("Database migration failed, not starting: %s", exc)
        sys.exit(1)
