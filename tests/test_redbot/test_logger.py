"""
Tests for the structlog helpers.
"""

import logging

import pytest
import structlog

from redbot.utils.logger import get_logger, mask_secret


@pytest.fixture
def unconfigured_structlog():
    """structlog in its default state, as in a host that never set it up."""
    structlog.reset_defaults()
    yield
    structlog.reset_defaults()


class TestGetLogger:
    """Test that loggers go through standard library logging."""

    def test_query_prints_nothing_without_setup(
        self, unconfigured_structlog, api, session, make_response, capsys
    ):
        session.request.return_value = make_response(body={"ok": True})

        api.query("GET", "x")

        assert capsys.readouterr().out == ""

    def test_events_reach_stdlib_logger(self, unconfigured_structlog, caplog):
        with caplog.at_level(logging.WARNING, logger="redbot.tests"):
            get_logger("redbot.tests").warning("rate_limit_exhausted", remaining=0)

        assert [r.name for r in caplog.records] == ["redbot.tests"]
        assert "rate_limit_exhausted" in caplog.text

    def test_package_logger_has_null_handler(self):
        handlers = logging.getLogger("redbot").handlers

        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestMaskSecret:
    def test_long_secret(self):
        assert mask_secret("abcdefghijkl") == "abcdef..."

    def test_short_secret(self):
        assert mask_secret("abc") == "***"
