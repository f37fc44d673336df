# tests/test_session.py
"""
Tests for the session controller (validate -> compute -> record, events, replay).

Run: pytest -v
"""

from __future__ import annotations

import pytest

from fibcalc.history import HistoryStore
from fibcalc.messages import error_message, text
from fibcalc.runtime import APPLY
from fibcalc.session import EXAMPLE_SHORTCUTS, Computed, HistoryChanged, Rejected, Session
from fibcalc.validator import ValidationErrorKind


@pytest.fixture
def session():
    s = Session()
    s.events = []  # type: ignore[attr-defined]
    s.subscribe(s.events.append)
    return s


def test_submit_computes_and_records(session):
    out = session.submit("10")
    assert out == Computed(n=10, value="55")
    assert session.result == out
    assert session.error is None
    assert [e.n for e in session.history.entries()] == [10]
    assert session.history.entries()[0].value == 55


def test_events_on_success(session):
    session.submit("45")
    computed, changed = session.events
    assert computed == Computed(n=45, value="1134903170")
    assert isinstance(changed, HistoryChanged)
    assert changed.entries == session.history.entries()


@pytest.mark.parametrize("raw,kind", [
    ("abc", ValidationErrorKind.NOT_A_NUMBER),
    ("", ValidationErrorKind.NOT_A_NUMBER),
    ("-1", ValidationErrorKind.NEGATIVE),
    ("46", ValidationErrorKind.TOO_LARGE),
])
def test_rejection_is_terminal(session, raw, kind):
    session.submit("5")
    before = session.history.entries()
    session.events.clear()

    out = session.submit(raw)

    assert out == Rejected(kind=kind, raw=raw)
    assert session.events == [out]            # no HistoryChanged
    assert session.history.entries() == before
    assert session.error is kind
    assert session.result == Computed(n=5, value="5")  # previous result kept


def test_submit_uses_current_input(session):
    session.input_text = "7"
    assert session.submit() == Computed(n=7, value="13")


def test_replay_prefills_without_computing(session):
    session.submit("12")
    session.submit("x")
    session.events.clear()

    n = session.replay(12)

    assert n == 12
    assert session.input_text == "12"
    assert session.error is None
    assert session.events == []
    assert len(session.history) == 1

    session.submit()
    assert [e.n for e in session.history.entries()] == [12, 12]


def test_replay_entry_by_position(session):
    for raw in ("3", "4", "5"):
        session.submit(raw)
    assert session.replay_entry(1) == 5
    assert session.replay_entry(3) == 3
    assert session.input_text == "3"
    with pytest.raises(IndexError):
        session.replay_entry(4)
    with pytest.raises(IndexError):
        session.replay_entry(0)


def test_clear_keeps_history(session):
    session.submit("8")
    session.submit("nope")
    session.clear()
    assert session.input_text == ""
    assert session.result is None
    assert session.error is None
    assert len(session.history) == 1


def test_history_capped(session):
    for n in range(7):
        session.submit(str(n))
    assert [e.n for e in session.history.entries()] == [6, 5, 4, 3, 2]


def test_delay_hook_called_with_configured_delay():
    calls = []
    s = Session(delay=calls.append, delay_s=0.2)
    assert s.submit("20") == Computed(n=20, value="6765")
    assert calls == [0.2]


def test_delay_hook_not_called_on_rejection():
    calls = []
    s = Session(delay=calls.append, delay_s=0.2)
    s.submit("99")
    assert calls == []


def test_delay_from_profile():
    APPLY({"BEHAVIOUR": {"DELAY_MS": 150}})
    calls = []
    Session(delay=calls.append).submit("1")
    assert calls == [0.15]


def test_no_delay_by_default():
    calls = []
    Session(delay=calls.append).submit("1")
    assert calls == []


def test_session_bound_overrides_profile():
    s = Session(max_n=100, history=HistoryStore(2))
    assert s.submit("100").value == "354224848179261915075"


def test_example_shortcuts_are_valid_indices(session):
    assert EXAMPLE_SHORTCUTS == (0, 1, 5, 10, 20)
    for n in EXAMPLE_SHORTCUTS:
        session.replay(n)
        assert isinstance(session.submit(), Computed)


# ---------- messages ----------------------------------------------------------

def test_messages_per_kind_are_distinct():
    msgs = {error_message(k, max_n=45) for k in ValidationErrorKind}
    assert len(msgs) == len(ValidationErrorKind)


def test_too_large_message_uses_bound():
    assert error_message(ValidationErrorKind.TOO_LARGE, max_n=45) == "Maximum value is n = 45"
    assert error_message(ValidationErrorKind.TOO_LARGE, max_n=90, locale="ru") == "Максимальное значение n = 90"


def test_unknown_locale_falls_back_to_english():
    assert error_message(ValidationErrorKind.NEGATIVE, max_n=45, locale="xx") == \
        error_message(ValidationErrorKind.NEGATIVE, max_n=45, locale="en")
    assert text("history_header", "xx", count=3) == "Last 3 calculations"
