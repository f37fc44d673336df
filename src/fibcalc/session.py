# src/fibcalc/session.py
"""
Session controller.

Holds what an interactive front end needs between requests (the current input
text, the last result or error, and the history) and changes it only through
validate -> fibonacci -> HistoryStore.record. Every state change is announced
to subscribers as one of the event types below.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from fibcalc.engine import fibonacci
from fibcalc.history import HistoryEntry, HistoryStore
from fibcalc.runtime import current as _rt_current
from fibcalc.validator import ValidationError, ValidationErrorKind, validate

# Indices offered as one-click examples
EXAMPLE_SHORTCUTS: tuple[int, ...] = (0, 1, 5, 10, 20)


# ---------- Events -------------------------------------------------------------

@dataclass(frozen=True)
class Computed:
    n: int
    value: str  # exact decimal representation


@dataclass(frozen=True)
class Rejected:
    kind: ValidationErrorKind
    raw: str = ""


@dataclass(frozen=True)
class HistoryChanged:
    entries: tuple[HistoryEntry, ...]


Event = Computed | Rejected | HistoryChanged
Listener = Callable[[Event], None]


# ---------- Session ------------------------------------------------------------

@dataclass
class Session:
    max_n: int | None = None
    history: HistoryStore = field(default_factory=HistoryStore)
    delay: Callable[[float], None] | None = None  # e.g. time.sleep
    delay_s: float | None = None

    input_text: str = ""
    result: Computed | None = None
    error: ValidationErrorKind | None = None
    _listeners: list[Listener] = field(default_factory=list, repr=False)

    @property
    def bound(self) -> int:
        return self.max_n if self.max_n is not None else _rt_current().max_n

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _emit(self, event: Event) -> None:
        for listener in list(self._listeners):
            listener(event)

    def submit(self, raw: str | None = None) -> Computed | Rejected:
        """
        Run one request: validate, compute, record.

        `raw` replaces the current input text when given. A validation failure
        is reported as Rejected and leaves result and history untouched.
        """
        if raw is not None:
            self.input_text = raw

        try:
            n = validate(self.input_text, self.bound)
        except ValidationError as e:
            self.error = e.kind
            outcome = Rejected(kind=e.kind, raw=self.input_text)
            self._emit(outcome)
            return outcome

        self.error = None
        value = fibonacci(n)

        wait = self.delay_s if self.delay_s is not None else _rt_current().delay_s
        if self.delay is not None and wait > 0:
            self.delay(wait)

        outcome = Computed(n=n, value=str(value))
        self.result = outcome
        self.history.record(HistoryEntry.make(n, value))
        self._emit(outcome)
        self._emit(HistoryChanged(entries=self.history.entries()))
        return outcome

    def replay(self, n: int) -> int:
        """Pre-fill the input with n; the caller submits when ready."""
        n = self.history.replay(n)
        self.input_text = str(n)
        self.error = None
        return n

    def replay_entry(self, position: int) -> int:
        """Replay the 1-based history position (1 = most recent)."""
        entries = self.history.entries()
        if not 1 <= position <= len(entries):
            raise IndexError(f"no history entry #{position} (have {len(entries)})")
        return self.replay(entries[position - 1].n)

    def clear(self) -> None:
        """Reset input, result and error; the history is kept."""
        self.input_text = ""
        self.result = None
        self.error = None
