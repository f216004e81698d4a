from __future__ import annotations


def str_prop(key: str, *, default: str) -> property:
    def _get(self) -> str:
        v = self._settings.get(key, default)
        if not isinstance(v, str) or not v.strip():
            return default
        return v.strip()

    def _set(self, value: str) -> None:
        v = str(value or "").strip()
        self._settings[key] = v or default
        self._save()

    return property(_get, _set)


def timeout_prop(key: str, *, default: float | None, min_v: float = 0.01, max_v: float = 600.0) -> property:
    """Seconds as float, clamped; `None` means "no timeout"."""

    def _coerce(value) -> float | None:
        if value is None:
            return None
        try:
            v = float(value)
        except (TypeError, ValueError):
            return default
        return max(min_v, min(max_v, v))

    def _get(self) -> float | None:
        return _coerce(self._settings.get(key, default))

    def _set(self, value: float | None) -> None:
        self._settings[key] = _coerce(value)
        self._save()

    return property(_get, _set)
