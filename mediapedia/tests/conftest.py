from __future__ import annotations

import os
import tempfile

import pytest
from keyring.backend import KeyringBackend
from keyring.errors import PasswordDeleteError


# Safety default: during pytest, never touch the user's real config, database
# or keychain entries.
os.environ.setdefault("MEDIAPEDIA_CONFIG_DIR", tempfile.mkdtemp(prefix="mediapedia-test-config-"))
os.environ.setdefault("MEDIAPEDIA_DATA_DIR", tempfile.mkdtemp(prefix="mediapedia-test-data-"))


class MemoryKeyring(KeyringBackend):
    """In-process keyring with the same missing-entry semantics as real backends."""

    priority = 1  # type: ignore[assignment]

    def __init__(self):
        super().__init__()
        self.store: dict[tuple[str, str], str] = {}
        self.calls: list[tuple[str, str, str]] = []

    def get_password(self, service, username):
        self.calls.append(("get", service, username))
        return self.store.get((service, username))

    def set_password(self, service, username, password):
        self.calls.append(("set", service, username))
        self.store[(service, username)] = password

    def delete_password(self, service, username):
        self.calls.append(("delete", service, username))
        try:
            del self.store[(service, username)]
        except KeyError:
            raise PasswordDeleteError("Password not found") from None


@pytest.fixture
def memory_keyring() -> MemoryKeyring:
    return MemoryKeyring()


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Point config and data dirs at a fresh temp tree for one test."""

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    monkeypatch.setenv("MEDIAPEDIA_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("MEDIAPEDIA_DATA_DIR", str(data_dir))
    monkeypatch.delenv("MEDIAPEDIA_CONFIG_PATH", raising=False)
    return config_dir, data_dir


@pytest.fixture(autouse=True)
def _reset_log_throttle():
    from mediapedia.core.logging_utils import reset_throttle

    reset_throttle()
    yield
    reset_throttle()
