# tests/test_progress.py
from __future__ import annotations

import itertools

from fibcalc.progress import Spinner
from fibcalc.session import Computed, Session


def test_disabled_spinner_just_sleeps(monkeypatch, capsys):
    slept = []
    monkeypatch.setattr("fibcalc.progress.time.sleep", slept.append)
    Spinner(enabled=False).wait(0.2)
    assert slept == [0.2]
    assert capsys.readouterr().out == ""


def test_spinner_draws_until_deadline(monkeypatch, capsys):
    clock = itertools.count(0.0, 0.05)
    monkeypatch.setattr("fibcalc.progress.time.perf_counter", lambda: next(clock))
    monkeypatch.setattr("fibcalc.progress.time.sleep", lambda s: None)

    Spinner("Working", frame_s=0.05).wait(0.2)

    out = capsys.readouterr().out
    assert out.count("Working") >= 3
    assert out.endswith("\r")


def test_spinner_as_session_delay(monkeypatch):
    slept = []
    monkeypatch.setattr("fibcalc.progress.time.sleep", slept.append)
    s = Session(delay=Spinner(enabled=False).wait, delay_s=0.2)
    assert s.submit("6") == Computed(n=6, value="8")
    assert slept == [0.2]
