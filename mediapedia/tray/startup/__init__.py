from .bootstrap import configure_logging, log_startup_diagnostics_if_debug, run_migrations, run_migrations_or_exit

__all__ = [
    "configure_logging",
    "log_startup_diagnostics_if_debug",
    "run_migrations",
    "run_migrations_or_exit",
]
