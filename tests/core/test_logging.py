"""
Tests for the logging module.

Tests verify:
- JSON output carries event, level and service metadata
- DEBUG logs are suppressed at INFO level
- Bound context appears in records and is removed on exit
- An unconfigured process emits nothing
"""

import json
import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from flagstate.core.logging import (
    ROOT_LOGGER,
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)

SRC_DIR = Path(__file__).resolve().parents[2] / "src"


@pytest.fixture(autouse=True)
def clean_log_context():
    clear_context()
    yield
    clear_context()
    configure_logging(level="WARNING", json_format=True)


def _records(capsys) -> list[dict]:
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.strip()]


class TestConfigureLogging:
    def test_json_record_fields(self, capsys):
        configure_logging(level="INFO", json_format=True, service="tests")
        get_logger("flagstate.tests").info("flags_added", flag=3)

        [record] = _records(capsys)
        assert record["event"] == "flags_added"
        assert record["flag"] == 3
        assert record["level"] == "info"
        assert record["service.name"] == "tests"
        assert record["logger_name"] == "flagstate.tests"
        assert "timestamp" in record

    def test_debug_suppressed_at_info(self, capsys):
        configure_logging(level="INFO", json_format=True)
        log = get_logger("flagstate.tests")
        log.debug("hidden")
        log.info("shown")

        events = [r["event"] for r in _records(capsys)]
        assert events == ["shown"]

    def test_configure_from_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("FLAGSTATE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("FLAGSTATE_LOG_JSON", "true")
        monkeypatch.setenv("FLAGSTATE_SERVICE_NAME", "flags-svc")
        configure_from_settings()
        get_logger("flagstate.tests").debug("visible")

        [record] = _records(capsys)
        assert record["event"] == "visible"
        assert record["service.name"] == "flags-svc"


class TestContext:
    def test_bind_context_included(self, capsys):
        configure_logging(json_format=True)
        bind_context(register="session")
        get_logger("flagstate.tests").info("flags_reset")

        [record] = _records(capsys)
        assert record["register"] == "session"

    def test_log_context_scoped(self, capsys):
        configure_logging(json_format=True)
        log = get_logger("flagstate.tests")
        with LogContext(register="job-7"):
            log.info("inside")
        log.info("outside")

        inside, outside = _records(capsys)
        assert inside["register"] == "job-7"
        assert "register" not in outside


class TestUnconfigured:
    """A host that never configures flagstate gets no output from it."""

    def test_register_writes_are_silent(self):
        script = textwrap.dedent(
            """
            from flagstate import FlagRegister

            register = FlagRegister.create(0)
            register.add_state(1)
            register.remove_state(1)
            register.reset_state()
            register.clear_state()
            """
        )
        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(SRC_DIR), env.get("PYTHONPATH")])
        )
        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True,
            text=True,
            env=env,
            timeout=60,
        )

        assert result.returncode == 0, result.stderr
        assert result.stdout == ""
        assert result.stderr == ""

    def test_package_logger_has_null_handler(self):
        handlers = logging.getLogger(ROOT_LOGGER).handlers
        assert any(isinstance(h, logging.NullHandler) for h in handlers)
