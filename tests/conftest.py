# tests/conftest.py
from __future__ import annotations

import pytest

from fibcalc import runtime


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    """Point the workspace at a temp dir and start every test on built-in defaults."""
    ws = tmp_path / "Fibcalc"
    monkeypatch.setenv("FIBCALC_HOME", str(ws))
    runtime.reset()
    yield ws
    runtime.reset()
