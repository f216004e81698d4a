"""Keychain backend resolution.

`keyring.get_keyring()` probes D-Bus / the macOS keychain / the Windows
credential manager. That probe is deferred until a credential command runs so
that importing the package (CLI --help, tests) never touches the OS keychain.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import keyring
from keyring.backends import fail

logger = logging.getLogger(__name__)


class SecretBackend(Protocol):
    """The subset of `keyring.backend.KeyringBackend` the vault relies on."""

    def get_password(self, service: str, username: str) -> str | None: ...

    def set_password(self, service: str, username: str, password: str) -> None: ...

    def delete_password(self, service: str, username: str) -> None: ...


def resolve_backend() -> Any:
    """Return the active keyring backend.

    When no usable backend exists keyring hands back its `fail.Keyring`,
    whose calls raise `NoKeyringError`; that is left to surface per call so
    reads can still degrade to "absent".
    """

    backend = keyring.get_keyring()
    if isinstance(backend, fail.Keyring):
        logger.warning("No OS keychain available; API keys cannot be stored")
    else:
        logger.debug("Keychain backend: %s", describe_backend(backend))
    return backend


def describe_backend(backend: Any) -> str:
    """Human-readable backend name for diagnostics. Never raises."""

    if backend is None:
        return "unresolved"
    try:
        name = getattr(backend, "name", None)
        if isinstance(name, str) and name:
            return name
    except Exception:
        pass
    cls = type(backend)
    return f"{cls.__module__}.{cls.__qualname__}"
