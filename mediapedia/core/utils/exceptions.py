from __future__ import annotations

from keyring.errors import PasswordDeleteError


class MediaPediaError(Exception):
    """Base class for errors raised by the MediaPedia backend core."""


class BackendUnavailable(MediaPediaError):
    """Secure storage or database backend could not be reached or opened."""

    def __init__(self, backend: str, cause: BaseException | str):
        self.backend = backend
        self.cause = cause
        super().__init__(f"{backend} unavailable: {cause}")


class BackendUnresponsive(BackendUnavailable):
    """A backend call did not return within its timeout."""

    def __init__(self, backend: str, timeout_s: float):
        self.timeout_s = timeout_s
        super().__init__(backend, f"no response after {timeout_s:g}s")


class TrayLockError(MediaPediaError):
    """The tray visibility lock could not be acquired."""


class ResourceUnavailable(MediaPediaError):
    """A host resource (tray icon, window) does not exist or rejected the call."""

    def __init__(self, resource: str, cause: BaseException | str | None = None):
        self.resource = resource
        self.cause = cause
        msg = f"{resource} not available"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)


class MigrationFailure(MediaPediaError):
    """A schema migration could not be applied; startup must not continue."""

    def __init__(self, version: int, message: str):
        self.version = version
        super().__init__(f"migration {version} failed: {message}")


def is_secret_not_found(exc: Exception) -> bool:
    """True when *exc* means "there was no secret to delete".

    keyring reports this as PasswordDeleteError; everything else (no backend,
    locked collection, D-Bus failures) is a real backend problem.
    """

    return isinstance(exc, PasswordDeleteError)


def is_permission_denied(exc: Exception) -> bool:
    """Best-effort check for permission/authorization failures.

    Keychain backends may raise PermissionError, OSError with errno, or wrap
    errors with a descriptive message.
    """

    if isinstance(exc, PermissionError):
        return True

    errno = getattr(exc, "errno", None)
    if errno in (1, 13):
        # EPERM=1, EACCES=13
        return True

    try:
        msg = str(exc).lower()
    except Exception:
        return False

    return "permission denied" in msg or "access denied" in msg or "not permitted" in msg
