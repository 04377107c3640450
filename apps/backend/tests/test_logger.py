"""Tests for logging helpers."""

import pytest
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.testing import capture_logs

from ledger_insights import logger as logger_module


def test_select_renderer_uses_console_in_debug(monkeypatch) -> None:
    monkeypatch.setattr(logger_module.settings, "debug", True)
    renderer = logger_module._select_renderer()
    assert isinstance(renderer, ConsoleRenderer)


def test_select_renderer_uses_json_in_production(monkeypatch) -> None:
    monkeypatch.setattr(logger_module.settings, "debug", False)
    renderer = logger_module._select_renderer()
    assert isinstance(renderer, JSONRenderer)


def test_log_timing_records_duration_and_context() -> None:
    log = logger_module.get_logger("test")

    with capture_logs() as logs:
        with logger_module.log_timing("build_series", logger=log, granularity="day") as ctx:
            ctx["buckets"] = 31

    [entry] = logs
    assert entry["event"] == "build_series completed"
    assert entry["granularity"] == "day"
    assert entry["buckets"] == 31
    assert entry["duration_ms"] >= 0


async def test_async_log_timing_uses_requested_level() -> None:
    log = logger_module.get_logger("test")

    with capture_logs() as logs:
        async with logger_module.async_log_timing("fetch_transactions", logger=log, level="debug", owner_id="o"):
            pass

    [entry] = logs
    assert entry["log_level"] == "debug"
    assert entry["owner_id"] == "o"


def test_log_timing_logs_even_when_operation_fails() -> None:
    log = logger_module.get_logger("test")

    with capture_logs() as logs:
        with pytest.raises(RuntimeError):
            with logger_module.log_timing("rollup", logger=log):
                raise RuntimeError("boom")

    assert [entry["event"] for entry in logs] == ["rollup completed"]


def test_log_exception_includes_error_details() -> None:
    log = logger_module.get_logger("test")

    with capture_logs() as logs:
        try:
            raise ValueError("bad amount")
        except ValueError as exc:
            logger_module.log_exception(log, exc, "Failed to parse amount", include_traceback=False, owner_id="o")

    [entry] = logs
    assert entry["event"] == "Failed to parse amount"
    assert entry["error"] == "bad amount"
    assert entry["error_type"] == "ValueError"
    assert entry["owner_id"] == "o"
    assert entry["log_level"] == "error"
