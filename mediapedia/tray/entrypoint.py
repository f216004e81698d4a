"""Startup entrypoint and small maintenance CLI.

`mediapedia` (or `mediapedia run`) runs the tray backend; `migrate` and
`keys` exercise the same startup and command paths without a desktop.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from typing import Iterable

from mediapedia import __version__
from mediapedia.commands import CommandError, CommandSurface
from mediapedia.core.config import Config
from mediapedia.core.credentials import CredentialVault
from mediapedia.core.utils.exceptions import MigrationFailure

from .controller import TrayController
from .startup import configure_logging, log_startup_diagnostics_if_debug, run_migrations, run_migrations_or_exit

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mediapedia", description="MediaPedia backend core")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("run", help="Run the tray backend (default)")
    sub.add_parser("migrate", help="Apply pending database migrations and exit")

    keys = sub.add_parser("keys", help="Manage the stored OMDb/TMDB API keys")
    keys_sub = keys.add_subparsers(dest="keys_command", required=True)
    keys_sub.add_parser("get", help="Show which API keys are stored (values are never printed)")
    set_p = keys_sub.add_parser("set", help="Store both API keys")
    set_p.add_argument("--omdb", help="OMDb API key (prompted if omitted)")
    set_p.add_argument("--tmdb", help="TMDB API key (prompted if omitted)")
    keys_sub.add_parser("reset", help="Delete both API keys")

    return parser


def _offline_commands(config: Config) -> CommandSurface:
    vault = CredentialVault(config.service_name, timeout_s=config.backend_timeout_s)
    # No tray loop in CLI mode; toggle_tray reports the icon as unavailable.
    return CommandSurface(vault, TrayController(lock_timeout_s=config.tray_lock_timeout))


def _cmd_migrate(config: Config) -> int:
    try:
        applied = run_migrations(config)
    except MigrationFailure as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    if applied:
        print("Applied migrations: " + ", ".join(str(v) for v in applied))
    else:
        print("Database is up to date.")
    return 0


def _cmd_keys(config: Config, args: argparse.Namespace) -> int:
    commands = _offline_commands(config)
    try:
        if args.keys_command == "get":
            payload = commands.invoke("get_keys")
            for field, value in payload.items():
                print(f"{field}: {'set' if value else 'not set'}")
        elif args.keys_command == "set":
            omdb = args.omdb if args.omdb is not None else getpass.getpass("OMDb API key: ")
            tmdb = args.tmdb if args.tmdb is not None else getpass.getpass("TMDB API key: ")
            commands.invoke("set_keys", omdbKey=omdb, tmdbKey=tmdb)
            print("API keys stored.")
        elif args.keys_command == "reset":
            commands.invoke("reset_keys")
            print("API keys cleared.")
    except CommandError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_run(config: Config) -> int:
    from .application import MediaPediaApp

    log_startup_diagnostics_if_debug(config)
    run_migrations_or_exit(config)

    app = MediaPediaApp(config)
    return app.run()


def main(argv: Iterable[str] | None = None) -> int:
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    try:
        configure_logging()
        config = Config()

        if args.command == "migrate":
            return _cmd_migrate(config)
        if args.command == "keys":
            return _cmd_keys(config, args)
        return _cmd_run(config)

    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0
    except Exception as exc:
        logger.exception("Unhandled error: %s", exc)
        return 1
