"""OS keychain storage for the OMDb and TMDB API keys.

Two accounts (`omdb`, `tmdb`) live under one service namespace. Reads never
fail outward: a missing key and a broken keychain both read as "absent",
because an unset key is ordinary UI state. Writes and deletes raise
`BackendUnavailable` so the host can tell the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, TypeVar

from ..logging_utils import log_throttled
from ..utils.exceptions import BackendUnavailable, is_permission_denied, is_secret_not_found
from ..utils.timeouts import call_with_timeout
from .backend import SecretBackend, describe_backend, resolve_backend

logger = logging.getLogger(__name__)

OMDB_ACCOUNT = "omdb"
TMDB_ACCOUNT = "tmdb"
ACCOUNTS = (OMDB_ACCOUNT, TMDB_ACCOUNT)

_BACKEND_LABEL = "keychain"
_READ_FAILURE_LOG_INTERVAL_S = 60.0

T = TypeVar("T")


@dataclass(frozen=True)
class ApiKeys:
    omdb_key: str | None = None
    tmdb_key: str | None = None

    def to_payload(self) -> dict[str, str | None]:
        """Field names as the host UI expects them."""

        return {"omdbKey": self.omdb_key, "tmdbKey": self.tmdb_key}

    def __repr__(self) -> str:
        # Never render secret values.
        return (
            f"ApiKeys(omdb_key={'<set>' if self.omdb_key else None}, "
            f"tmdb_key={'<set>' if self.tmdb_key else None})"
        )


class CredentialVault:
    """Reads, writes and deletes the two API keys in OS secure storage."""

    def __init__(self, service_name: str, *, backend: SecretBackend | None = None, timeout_s: float | None = None):
        if not service_name or not str(service_name).strip():
            raise ValueError("service_name must be a non-empty string")
        self.service_name = str(service_name).strip()
        self.timeout_s = timeout_s
        self._backend = backend

    # ---- backend plumbing

    @property
    def backend(self) -> SecretBackend:
        if self._backend is None:
            self._backend = resolve_backend()
        return self._backend

    def backend_name(self) -> str:
        try:
            return describe_backend(self.backend)
        except Exception:
            return "unavailable"

    def _call(self, fn: Callable[[], T]) -> T:
        return call_with_timeout(fn, timeout_s=self.timeout_s, backend=_BACKEND_LABEL)

    # ---- reads

    def _read(self, account: str) -> str | None:
        try:
            value = self._call(lambda: self.backend.get_password(self.service_name, account))
        except Exception as exc:
            log_throttled(
                logger,
                f"credentials.read.{self.service_name}.{account}",
                interval_s=_READ_FAILURE_LOG_INTERVAL_S,
                level=logging.WARNING,
                msg=f"Could not read {account} key from {_BACKEND_LABEL}; treating as absent",
                exc=exc,
            )
            return None
        # Some backends hand back "" for a cleared entry.
        return value or None

    def get_keys(self) -> ApiKeys:
        return ApiKeys(omdb_key=self._read(OMDB_ACCOUNT), tmdb_key=self._read(TMDB_ACCOUNT))

    # ---- writes

    def _write(self, account: str, value: str) -> None:
        try:
            self._call(lambda: self.backend.set_password(self.service_name, account, value))
        except BackendUnavailable:
            raise
        except Exception as exc:
            if is_permission_denied(exc):
                logger.error("Permission denied writing %s key to %s", account, _BACKEND_LABEL)
            raise BackendUnavailable(_BACKEND_LABEL, exc) from exc

    def set_keys(self, omdb_key: str, tmdb_key: str) -> None:
        """Store both keys, omdb first.

        Each write is a single backend call. The pair is not atomic: if the
        omdb write fails the tmdb write is not attempted. Both values are
        type-checked before anything is written.
        """

        pairs = ((OMDB_ACCOUNT, omdb_key), (TMDB_ACCOUNT, tmdb_key))
        for account, value in pairs:
            if not isinstance(value, str):
                raise TypeError(f"{account} key must be a string, got {type(value).__name__}")
        for account, value in pairs:
            self._write(account, value)
        logger.info("Stored API keys in %s (service=%s)", self.backend_name(), self.service_name)

    # ---- deletes

    def _delete(self, account: str) -> None:
        try:
            self._call(lambda: self.backend.delete_password(self.service_name, account))
        except BackendUnavailable:
            raise
        except Exception as exc:
            if is_secret_not_found(exc):
                logger.debug("No %s key stored; nothing to delete", account)
                return
            raise BackendUnavailable(_BACKEND_LABEL, exc) from exc

    def reset_keys(self) -> None:
        """Delete both keys.

        An already-absent key is not an error. Both deletions are always
        attempted; if the keychain itself failed for either account, the first
        such failure is raised after the second attempt.
        """

        failures: list[BackendUnavailable] = []
        for account in ACCOUNTS:
            try:
                self._delete(account)
            except BackendUnavailable as exc:
                logger.warning("Failed to delete %s key: %s", account, exc.cause)
                failures.append(exc)

        if failures:
            raise failures[0]
        logger.info("Cleared API keys (service=%s)", self.service_name)
