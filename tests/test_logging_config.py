"""
Tests for logging_config module.

This module tests the SensitiveFilter and SENSITIVE_PATTERNS to ensure
that access tokens are properly masked in log messages.
"""

import logging

import pytest

from netlify_ddns.logging_config import (
    SENSITIVE_PATTERNS,
    SensitiveFilter,
    setup_logging,
)


def apply_patterns(msg: str) -> str:
    """Apply all sensitive patterns to a message."""
    result = msg
    for pattern, replacement in SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def make_record(msg: str, args: tuple | dict | None = None) -> logging.LogRecord:
    """Build a log record for filter tests."""
    return logging.LogRecord(
        name="netlify_ddns.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestSensitivePatterns:
    """Tests for SENSITIVE_PATTERNS regex patterns."""

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            # Standard Bearer token - keep 6 chars
            (
                "Authorization: Bearer abc123xyz789token",
                "Authorization: Bearer abc123******",
            ),
            # Short token (less than 6 chars) - keep all available
            ("Authorization: Bearer xy", "Authorization: Bearer xy******"),
            # Case insensitive
            (
                "authorization: bearer ABC123XYZ",
                "authorization: bearer ABC123******",
            ),
            # Bare Bearer without header name
            ("Bearer nfp_secretvalue", "Bearer nfp_se******"),
        ],
    )
    def test_authorization_bearer(self, original: str, expected: str) -> None:
        """Test Authorization Bearer token masking."""
        assert apply_patterns(original) == expected

    @pytest.mark.parametrize(
        ("original", "expected"),
        [
            ("access_token=abcdefghijk", "access_token=abcdef******"),
            ("?access_token=abc&x=1", "?access_token=abc******&x=1"),
        ],
    )
    def test_access_token_param(self, original: str, expected: str) -> None:
        """Test access_token query parameter masking."""
        assert apply_patterns(original) == expected

    @pytest.mark.parametrize(
        "message",
        [
            "add DNS record home.example.com, ip 203.0.113.5",
            "removing DNS record home.example.com, ip 198.51.100.9",
        ],
    )
    def test_operator_lines_untouched(self, message: str) -> None:
        """Test that normal log lines are not modified."""
        assert apply_patterns(message) == message


class TestSensitiveFilter:
    """Tests for SensitiveFilter."""

    def test_masks_msg(self) -> None:
        record = make_record("Authorization: Bearer supersecrettoken")
        assert SensitiveFilter().filter(record) is True
        assert record.getMessage() == "Authorization: Bearer supers******"

    def test_masks_tuple_args(self) -> None:
        record = make_record("header %s status %d", ("Bearer supersecrettoken", 401))
        SensitiveFilter().filter(record)
        assert record.getMessage() == "header Bearer supers****** status 401"

    def test_masks_dict_args(self) -> None:
        record = make_record("%(auth)s", ({"auth": "Bearer supersecrettoken"},))
        SensitiveFilter().filter(record)
        assert record.getMessage() == "Bearer supers******"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_configures_package_logger(self) -> None:
        setup_logging("WARNING")
        logger = logging.getLogger("netlify_ddns")
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        handler = logger.handlers[0]
        assert any(isinstance(f, SensitiveFilter) for f in handler.filters)

    def test_repeated_setup_does_not_duplicate_handlers(self) -> None:
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(logging.getLogger("netlify_ddns").handlers) == 1

    def test_httpx_quiet_unless_debug(self) -> None:
        setup_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        setup_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.DEBUG

    def test_writes_to_stderr(self, capsys) -> None:
        setup_logging("INFO")
        logging.getLogger("netlify_ddns.test").info("add DNS record a.example.com, ip 1.2.3.4")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "INFO  [netlify_ddns.test] add DNS record a.example.com, ip 1.2.3.4" in captured.err
