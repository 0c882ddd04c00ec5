"""
Shared pytest fixtures for flagstate tests.

Provides:
- ``letters``: the A..F vocabulary (bits 1, 2, 4, 8, 16, 32) used by the
  end-to-end scenarios
- settings isolation so FLAGSTATE_* variables never leak between tests
- WARNING-level logging so register DEBUG events stay out of test output
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure flagstate package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from flagstate import StateFlag
from flagstate.core.logging import configure_logging
from flagstate.core.settings import reset_settings


class Letters(StateFlag):
    NONE = 0
    A = 1 << 0
    B = 1 << 1
    C = 1 << 2
    D = 1 << 3
    E = 1 << 4
    F = 1 << 5


@pytest.fixture
def letters() -> type[Letters]:
    return Letters


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Strip FLAGSTATE_* variables and drop cached settings around each test."""
    for key in list(os.environ):
        if key.startswith("FLAGSTATE_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(level="WARNING", json_format=True)
