"""
Unit tests for structlog configuration.
"""

import io
import json
import logging

import pytest
import structlog

from remote_reconciler.logging_config import configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def json_events(stream: io.StringIO) -> dict:
    lines = [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]
    return {line["event"]: line for line in lines}


def test_production_renders_json_with_app_context(restore_logging):
    stream = io.StringIO()
    configure_logging(log_level="INFO", environment="production", stream=stream)

    logging.getLogger("remote_reconciler.test").info("Remote call failed, retrying")

    events = json_events(stream)
    assert "Logging configured" in events
    event = events["Remote call failed, retrying"]
    assert event["app"] == "remote-reconciler"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_credentials_are_masked(restore_logging):
    stream = io.StringIO()
    configure_logging(log_level="INFO", environment="production", stream=stream)

    structlog.get_logger("remote_reconciler.test").info("Client built", token="secret-token")

    assert json_events(stream)["Client built"]["token"] == "***"
    assert "secret-token" not in stream.getvalue()


def test_log_level_applied_and_http_noise_reduced(restore_logging):
    configure_logging(log_level="debug", environment="development", stream=io.StringIO())

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
