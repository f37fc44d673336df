# runtime.py
from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

# Built-in defaults; a profile may override them
MAX_N = 45
HISTORY_CAPACITY = 5


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False  # controls verbosity / tracebacks

    def apply(self, settings: Any) -> None:
        """Install a config.Settings or a plain nested dict."""
        if isinstance(settings, dict):
            self.profile_name = "default"
            self.settings = dict(settings)
        else:
            self.profile_name = settings.name
            self.settings = dict(settings.as_dict())

        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'LIMITS.MAX_N'."""
        if not key:
            return default
        cur = self.settings
        if isinstance(key, str) and "." in key:
            for part in key.split("."):
                if isinstance(cur, dict) and part in cur:
                    cur = cur[part]
                else:
                    return default
            return cur
        return cur.get(key, default)

    # --- typed accessors for the recognized options ---

    @property
    def max_n(self) -> int:
        return int(self.get("LIMITS.MAX_N", MAX_N))

    @property
    def history_capacity(self) -> int:
        return int(self.get("HISTORY.CAPACITY", HISTORY_CAPACITY))

    @property
    def delay_s(self) -> float:
        return max(0.0, float(self.get("BEHAVIOUR.DELAY_MS", 0)) / 1000.0)

    @property
    def locale(self) -> str:
        return str(self.get("DISPLAY.LOCALE", "en"))


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("fibcalc_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    """Install a fresh Runtime (built-in defaults) and return it."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)

