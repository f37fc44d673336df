from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("fibcalc")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings
from .engine import fibonacci, fibonacci_sequence
from .history import HistoryEntry, HistoryStore
from .runtime import APPLY, CFG, HISTORY_CAPACITY, MAX_N
from .session import EXAMPLE_SHORTCUTS, Computed, HistoryChanged, Rejected, Session
from .validator import ValidationError, ValidationErrorKind, validate
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "EXAMPLE_SHORTCUTS",
    "HISTORY_CAPACITY",
    "MAX_N",
    "Computed",
    "HistoryChanged",
    "HistoryEntry",
    "HistoryStore",
    "Rejected",
    "Session",
    "ValidationError",
    "ValidationErrorKind",
    "__version__",
    "fibonacci",
    "fibonacci_sequence",
    "has_profile",
    "load_settings",
    "validate",
    "workspace_dir",
]
