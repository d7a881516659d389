r"""Unit tests for retry listeners."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from aretry import RetryTemplate
from aretry.context import RetryContext
from aretry.listener import LoggingRetryListener, RetryListener
from tests.helpers import FlakyWork


def sync_orders(context: RetryContext) -> str:  # noqa: ARG001
    return "ok"


def test_retry_listener_defaults() -> None:
    """Test that the default hooks do nothing."""
    listener = RetryListener()
    context = RetryContext()
    work = Mock()
    assert listener.open(context, work)
    assert listener.close(context, work, None) is None
    assert listener.on_success(context, work, "result") is None
    assert listener.on_error(context, work, ValueError()) is None
    work.assert_not_called()


def test_logging_retry_listener_default_logger() -> None:
    """Test the default logger and level."""
    listener = LoggingRetryListener()
    assert listener.logger.name == "aretry.listener"
    assert listener.level == logging.DEBUG


def test_logging_retry_listener_success(caplog: pytest.LogCaptureFixture) -> None:
    """Test the records of a successful execution."""
    with caplog.at_level(logging.INFO):
        RetryTemplate(listeners=[LoggingRetryListener(level=logging.INFO)]).execute(sync_orders)
    assert "Opening retry execution of sync_orders" in caplog.text
    assert "sync_orders succeeded on attempt 1" in caplog.text
    assert "Closing retry execution of sync_orders after 0 failure(s)" in caplog.text


def test_logging_retry_listener_failure(caplog: pytest.LogCaptureFixture) -> None:
    """Test the records of a failing execution."""
    logger = logging.getLogger("tests.listener")
    listener = LoggingRetryListener(logger=logger, level=logging.WARNING)
    with caplog.at_level(logging.WARNING, logger="tests.listener"), pytest.raises(RuntimeError):
        RetryTemplate(listeners=[listener]).execute(FlakyWork(attempts_before_success=10))
    assert "failed on attempt 1: RuntimeError: planned" in caplog.text
    assert "failed on attempt 3: RuntimeError: planned" in caplog.text
    assert "after 3 failure(s), last error: RuntimeError: planned" in caplog.text
    assert all(record.name == "tests.listener" for record in caplog.records)


def test_logging_retry_listener_disabled_level(caplog: pytest.LogCaptureFixture) -> None:
    """Test that nothing is logged below the logger level."""
    with caplog.at_level(logging.INFO):
        RetryTemplate(listeners=[LoggingRetryListener()]).execute(sync_orders)
    assert "Opening retry execution" not in caplog.text
