"""
Test suite for logging helpers and correlation tracking.

System role: Verification of observability utilities
"""

import logging

import pytest
from pydantic import SecretStr

from docchat.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from docchat.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from docchat.observability.logger import CorrelationIdFilter


@pytest.fixture(autouse=True)
def reset_correlation_id():
    """Leave no correlation ID behind between tests."""
    yield
    clear_correlation_id()


class TestCorrelationId:
    """Test correlation ID context handling."""

    def test_set_uses_given_value(self):
        assert set_correlation_id("req-1") == "req-1"
        assert get_correlation_id() == "req-1"

    def test_set_generates_value_when_missing(self):
        value = set_correlation_id()

        assert value
        assert get_correlation_id() == value

    def test_filter_attaches_id_to_records(self):
        set_correlation_id("req-2")
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        assert CorrelationIdFilter().filter(record)
        assert record.correlation_id == "req-2"

    def test_filter_uses_dash_outside_request(self):
        record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "-"


class TestSafeLogValue:
    """Test structured value conversion."""

    def test_bytes_are_summarised(self):
        assert safe_log_value(b"abcd") == "<4 bytes>"

    def test_collections_are_summarised(self):
        assert safe_log_value([1, 2, 3]) == "<list of 3>"
        assert safe_log_value({"filename": "a.txt", "service": "gemini"}) == "<2 keys: filename, service>"

    def test_secrets_are_masked(self):
        assert safe_log_value(SecretStr("api-key")) == "**********"

    def test_long_values_are_truncated(self):
        value = safe_log_value("x" * 20, max_length=5)

        assert value == "xxxxx[+15 chars]"

    def test_non_strings_use_repr(self):
        assert safe_log_value(None) == "None"
        assert safe_log_value(3) == "3"


class TestContextLogging:
    """Test context-carrying log helpers."""

    def test_log_with_context_adds_safe_extras(self, caplog):
        logger = logging.getLogger("docchat.tests")

        with caplog.at_level(logging.INFO, logger="docchat.tests"):
            log_with_context(logger, logging.INFO, "stored", session_id="s1", payload=b"xyz")

        record = caplog.records[-1]
        assert record.session_id == "s1"
        assert record.payload == "<3 bytes>"

    def test_log_exception_with_context_records_error_type(self, caplog):
        logger = logging.getLogger("docchat.tests")

        with caplog.at_level(logging.ERROR, logger="docchat.tests"):
            log_exception_with_context(logger, "failed", ValueError("bad"), path="/x")

        record = caplog.records[-1]
        assert record.error_type == "ValueError"
        assert record.error_msg == "bad"
        assert record.path == "/x"
