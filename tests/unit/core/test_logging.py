# tests/unit/core/test_logging.py
"""Tests for logging configuration, context binding and credential masking."""

import json
import logging
from collections.abc import Iterator
from typing import Any

import pytest
import structlog

from sinkadmin.core.logging import REDACTED, configure_logging, get_logger, redact_secrets


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """configure_logging() mutates process-global state; put it back."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def last_json_line(capsys: pytest.CaptureFixture[str]) -> dict[str, Any]:
    lines = [line for line in capsys.readouterr().err.strip().split("\n") if line]
    data: dict[str, Any] = json.loads(lines[-1])
    return data


class TestConfigureLogging:
    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("sinkadmin.test").info("sink_submit", path="/admin/v3/sink/t/ns/s", parts=["sinkConfig"])

        data = last_json_line(capsys)
        assert data["event"] == "sink_submit"
        assert data["path"] == "/admin/v3/sink/t/ns/s"
        assert data["parts"] == ["sinkConfig"]
        assert data["level"] == "info"
        assert data["logger"] == "sinkadmin.test"
        assert "timestamp" in data
        assert "_record" not in data
        assert "_from_structlog" not in data

    def test_writes_to_stderr_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("sinkadmin.test").warning("sink_admin_request_failed")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "sink_admin_request_failed" in captured.err

    def test_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=False)

        get_logger("sinkadmin.test").info("sink_admin_created", service_url="http://admin.test")

        err = capsys.readouterr().err
        assert "sink_admin_created" in err
        assert not err.strip().startswith("{")

    def test_stdlib_loggers_share_renderer(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        logging.getLogger("some.library").warning("from stdlib")

        data = last_json_line(capsys)
        assert data["event"] == "from stdlib"
        assert data["level"] == "warning"
        assert data["logger"] == "some.library"

    def test_level_filters(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="WARNING")

        logger = get_logger("sinkadmin.test")
        logger.debug("sink_admin_request")
        logger.warning("sink_admin_request_failed", status_code=503)

        lines = [line for line in capsys.readouterr().err.strip().split("\n") if line]
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "sink_admin_request_failed"

    def test_level_is_case_insensitive(self) -> None:
        configure_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(ValueError, match="unknown log level"):
            configure_logging(level="chatty")

    def test_http_internals_kept_at_warning(self) -> None:
        configure_logging(level="DEBUG")

        for name in ("httpx", "httpcore", "asyncio"):
            assert logging.getLogger(name).getEffectiveLevel() >= logging.WARNING

    def test_http_internals_follow_stricter_root(self) -> None:
        configure_logging(level="ERROR")

        assert logging.getLogger("httpx").level == logging.ERROR


class TestGetLogger:
    def test_events_tagged_with_client(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("sinkadmin.clients.engine").info("http_engine_closed")

        assert last_json_line(capsys)["client"] == "sinkadmin"

    def test_extra_context_bound(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("sinkadmin.test", tenant="public").info("sink_submit")

        data = last_json_line(capsys)
        assert data["tenant"] == "public"
        assert data["client"] == "sinkadmin"

    def test_created_before_configuration(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = get_logger("sinkadmin.test")
        configure_logging(json_output=True)

        logger.info("sink_admin_created")

        assert last_json_line(capsys)["event"] == "sink_admin_created"


class TestRedaction:
    def test_secret_keys_masked(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        get_logger("sinkadmin.test").info("sink_admin_created", auth_token="s3cr3t", Authorization="Bearer s3cr3t")

        data = last_json_line(capsys)
        assert data["auth_token"] == REDACTED
        assert data["Authorization"] == REDACTED

    def test_nested_headers_masked(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True, level="DEBUG")

        get_logger("sinkadmin.test").debug(
            "sink_admin_request",
            headers={"Authorization": "Bearer s3cr3t", "Accept": "application/json"},
        )

        data = last_json_line(capsys)
        assert data["headers"] == {"Authorization": REDACTED, "Accept": "application/json"}

    def test_credentials_in_messages_masked(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=True)

        logging.getLogger("httpx").error("rejected header Authorization: Bearer s3cr3t")

        out = capsys.readouterr().err
        assert "s3cr3t" not in out
        assert f"Bearer {REDACTED}" in out

    def test_console_output_masked(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(json_output=False)

        get_logger("sinkadmin.test").warning("sink_admin_request_failed", token="s3cr3t", error="Basic dXNlcjpwdw==")

        err = capsys.readouterr().err
        assert "s3cr3t" not in err
        assert "dXNlcjpwdw==" not in err

    def test_other_values_untouched(self) -> None:
        event = {"event": "sink_submit", "path": "/admin/v3/sink/t/ns/s", "parts": ("sinkConfig", "data"), "status_code": 409}

        redacted = redact_secrets(None, "info", dict(event))

        assert redacted == {**event, "parts": ["sinkConfig", "data"]}

    def test_processor_bookkeeping_skipped(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        redacted = redact_secrets(None, "info", {"event": "msg", "_record": record})

        assert redacted["_record"] is record
