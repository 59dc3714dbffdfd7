# tests/conftest.py
from __future__ import annotations

import sys

import pytest

from pow2shift.runtime import reset


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    """Every test gets its own empty workspace and a fresh runtime."""
    ws = tmp_path / "ws"
    monkeypatch.setenv("POW2SHIFT_HOME", str(ws))
    reset()
    return ws


@pytest.fixture(autouse=True)
def _restore_digit_limit():
    # some tests pin Python's int/str digit guard process-wide
    old = sys.get_int_max_str_digits()
    yield
    sys.set_int_max_str_digits(old)
