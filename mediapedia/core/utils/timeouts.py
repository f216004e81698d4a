from __future__ import annotations

import threading
from typing import Callable, TypeVar

from .exceptions import BackendUnresponsive

T = TypeVar("T")


def call_with_timeout(fn: Callable[[], T], *, timeout_s: float | None, backend: str) -> T:
    """Run *fn* and return its result, giving up after *timeout_s* seconds.

    With `timeout_s=None` the call runs inline. Otherwise it runs on a daemon
    worker thread; a call that overruns is abandoned (not cancelled) and
    `BackendUnresponsive` is raised. Exceptions from *fn* are re-raised in the
    caller.
    """

    if timeout_s is None:
        return fn()

    result: dict[str, object] = {}
    done = threading.Event()

    def _worker() -> None:
        try:
            result["value"] = fn()
        except BaseException as exc:  # re-raised in the calling thread
            result["error"] = exc
        finally:
            done.set()

    worker = threading.Thread(target=_worker, name=f"{backend}-call", daemon=True)
    worker.start()

    if not done.wait(timeout_s):
        raise BackendUnresponsive(backend, timeout_s)

    if "error" in result:
        raise result["error"]  # type: ignore[misc]
    return result["value"]  # type: ignore[return-value]
