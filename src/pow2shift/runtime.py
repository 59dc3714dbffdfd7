# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

DEFAULT_THRESHOLD = 100


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls verbosity / tracebacks

    def apply(self, settings: Any) -> None:
        self.profile_name = (
            getattr(settings, "name", None)
            or getattr(settings, "_source", None)
            or "default"
        )

        self.settings = dict(settings.as_dict())

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'BEHAVIOUR.THRESHOLD'."""
        if not key:
            return default
        cur = self.settings
        if "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("pow2shift_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime (one per CLI invocation)."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)

