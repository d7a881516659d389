from __future__ import annotations

import json
import logging
from io import StringIO
from typing import TYPE_CHECKING

import pytest

from aretry import RetryTemplate
from aretry.context import NAME, RetryContext
from aretry.synchronization import active_context
from aretry.utils import StructuredFormatter, log_structured, retry_context_fields

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def structured() -> Generator[tuple[logging.Logger, StringIO], None, None]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("test_structured")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield logger, stream
    finally:
        logger.removeHandler(handler)


def _records(stream: StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().strip().split("\n") if line]


##########################################
#     Tests for retry_context_fields     #
##########################################


def test_retry_context_fields_outside_execution() -> None:
    """Test that no field is produced outside of any execution."""
    assert retry_context_fields() == {}


def test_retry_context_fields_active_context() -> None:
    """Test the fields of an active context."""
    context = RetryContext()
    context.register_throwable(ValueError())
    context.set_attribute(NAME, "sync-orders")
    with active_context(context):
        assert retry_context_fields() == {
            "retry_count": 1,
            "retry_depth": 1,
            "retry_name": "sync-orders",
        }


def test_retry_context_fields_nested() -> None:
    """Test the depth of a nested context."""
    outer = RetryContext()
    with active_context(RetryContext(RetryContext(outer))):
        assert retry_context_fields() == {"retry_count": 0, "retry_depth": 3}


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_basic_log(structured: tuple[logging.Logger, StringIO]) -> None:
    """Test that StructuredFormatter produces valid JSON."""
    logger, stream = structured
    logger.info("Test message")
    (log_data,) = _records(stream)
    assert log_data["message"] == "Test message"
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test_structured"
    assert "timestamp" in log_data
    assert "function" in log_data
    assert "line" in log_data
    assert "retry_count" not in log_data


def test_structured_formatter_inside_execution(
    structured: tuple[logging.Logger, StringIO],
) -> None:
    """Test that records emitted by the work carry the attempt
    number."""
    logger, stream = structured
    calls = []

    def work(context: RetryContext) -> str:
        context.set_attribute(NAME, "fetch")
        logger.info("attempt")
        calls.append(context.retry_count)
        if len(calls) < 2:
            msg = "planned"
            raise RuntimeError(msg)
        return "ok"

    RetryTemplate().execute(work)
    records = _records(stream)
    assert [record["retry_count"] for record in records] == [0, 1]
    assert all(record["retry_name"] == "fetch" for record in records)
    assert all(record["retry_depth"] == 1 for record in records)


def test_structured_formatter_with_extra_fields(
    structured: tuple[logging.Logger, StringIO],
) -> None:
    """Test that StructuredFormatter includes extra fields."""
    logger, stream = structured
    logger.info("Work completed", extra={"attempts": 2, "duration_ms": 150})
    (log_data,) = _records(stream)
    assert log_data["attempts"] == 2
    assert log_data["duration_ms"] == 150


def test_structured_formatter_non_serializable_extra(
    structured: tuple[logging.Logger, StringIO],
) -> None:
    """Test that extra values unknown to JSON are rendered with
    repr."""
    logger, stream = structured
    logger.info("Failure", extra={"error": KeyError("missing")})
    (log_data,) = _records(stream)
    assert log_data["error"] == "KeyError('missing')"


def test_structured_formatter_with_exception(
    structured: tuple[logging.Logger, StringIO],
) -> None:
    """Test that StructuredFormatter includes exception information."""
    logger, stream = structured
    try:
        msg = "Test error"
        raise ValueError(msg)
    except ValueError:
        logger.exception("An error occurred")
    (log_data,) = _records(stream)
    assert "ValueError: Test error" in log_data["exception"]


def test_structured_formatter_timestamp_format(
    structured: tuple[logging.Logger, StringIO],
) -> None:
    """Test that StructuredFormatter uses ISO 8601 timestamp."""
    logger, stream = structured
    logger.info("Timestamp test")
    timestamp = _records(stream)[0]["timestamp"]
    # Format: YYYY-MM-DDTHH:MM:SS.MMMZ
    assert "T" in timestamp
    assert timestamp.endswith("Z")
    assert len(timestamp) == 24


####################################
#     Tests for log_structured     #
####################################


def test_log_structured_with_extra_fields(structured: tuple[logging.Logger, StringIO]) -> None:
    """Test log_structured helper function."""
    logger, stream = structured
    log_structured(logger, logging.INFO, "Retry exhausted", attempts=3, last_error="KeyError")
    (log_data,) = _records(stream)
    assert log_data["message"] == "Retry exhausted"
    assert log_data["attempts"] == 3
    assert log_data["last_error"] == "KeyError"


def test_log_structured_respects_log_level(structured: tuple[logging.Logger, StringIO]) -> None:
    """Test that log_structured respects logger's log level."""
    logger, stream = structured
    logger.setLevel(logging.WARNING)
    log_structured(logger, logging.INFO, "Info message")
    log_structured(logger, logging.WARNING, "Warning message")
    assert [record["message"] for record in _records(stream)] == ["Warning message"]


def test_template_logs_exhaustion(caplog: pytest.LogCaptureFixture) -> None:
    """Test the structured record emitted on exhaustion."""
    with caplog.at_level(logging.DEBUG, logger="aretry"), pytest.raises(KeyError):
        RetryTemplate().execute(lambda context: {}["missing"])  # noqa: ARG005
    (record,) = [r for r in caplog.records if r.getMessage().startswith("Retry exhausted")]
    assert record.attempts == 3
    assert record.last_error == "KeyError"
