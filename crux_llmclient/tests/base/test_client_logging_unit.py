"""Unit coverage for structured logging utilities."""
from __future__ import annotations

import json
import logging
import sys

from crux_llmclient.base.log_support import JsonFormatter
from crux_llmclient.base.logging import (
    REQUIRED_NORMALIZED_KEYS,
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def _last_json_line(err: str) -> dict:
    return json.loads(err.strip().splitlines()[-1])


def test_get_logger_nests_names_under_base():
    assert get_logger("httpx_provider").name == "crux_llmclient.httpx_provider"  # nosec B101
    assert get_logger("crux_llmclient.client").name == "crux_llmclient.client"  # nosec B101


def test_env_level_override_suppresses_info(monkeypatch, capsys):
    monkeypatch.setenv("LLMCLIENT_LOG_LEVEL", "ERROR")
    logger = get_logger("levels", level=logging.DEBUG)
    logger.info("hidden")
    assert capsys.readouterr().err == ""  # nosec B101
    logger.error("shown")
    assert _last_json_line(capsys.readouterr().err)["level"] == "ERROR"  # nosec B101
    monkeypatch.delenv("LLMCLIENT_LOG_LEVEL")
    get_logger("levels", level=logging.INFO)


def test_log_event_hoists_payload_and_context(capsys):
    logger = get_logger("events")
    ctx = LogContext(url="http://x", mode="ndjson", request_id="r1", extra={"attempt_note": None, "k": 1})
    log_event(logger, "stream.start", ctx, dropped=None, kept="v")
    data = _last_json_line(capsys.readouterr().err)
    assert data["event"] == "stream.start" and data["url"] == "http://x" and data["k"] == 1  # nosec B101
    assert "dropped" not in data and "attempt_note" not in data and data["kept"] == "v"  # nosec B101


def test_normalized_log_event_keys_and_warning_on_error(capsys):
    logger = get_logger("normalized")
    normalized_log_event(logger, "send.end", LogContext(model="m"), phase="finalize", attempt=1, emitted=True)
    data = _last_json_line(capsys.readouterr().err)
    for key in REQUIRED_NORMALIZED_KEYS:
        if key != "error_code":
            assert key in data  # nosec B101
    assert "error_code" not in data and data["level"] == "INFO"  # nosec B101

    normalized_log_event(logger, "send.error", None, phase="finalize", error_code="HTTP_500", attempt=None, emitted=False)
    data = _last_json_line(capsys.readouterr().err)
    assert data["error_code"] == "HTTP_500" and data["level"] == "WARNING" and data["attempt"] is None  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "client.log"
    child = get_logger("file")
    logger = configure_logger(level="DEBUG", file_path=str(target))
    try:
        log_event(child, "file.event", None, level=logging.DEBUG, n=1)
        for h in logger.handlers:
            h.flush()
        line = target.read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["event"] == "file.event"  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)


def test_json_formatter_includes_exception():
    record = logging.LogRecord("crux_llmclient.t", logging.ERROR, __file__, 1, "boom", None, None)
    try:
        raise RuntimeError("bad")
    except RuntimeError:
        record.exc_info = sys.exc_info()
    data = json.loads(JsonFormatter().format(record))
    assert data["msg"] == "boom" and "RuntimeError: bad" in data["exc"]  # nosec B101
