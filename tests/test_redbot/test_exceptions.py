"""
Unit tests for the ApiError type.

Tests rendering, origin tags and the wrapping constructors defined in
redbot/exceptions.py.
"""

import json

import pytest
import requests

from redbot.exceptions import (
    SOURCE_DECODE,
    SOURCE_IO,
    SOURCE_METHOD,
    SOURCE_TRANSPORT,
    ApiError,
)


class TestApiErrorDisplay:
    """Test string rendering."""

    def test_display_no_source(self):
        """Application errors render without an origin."""
        error = ApiError("something")
        assert str(error) == "API error: something"

    def test_display_with_source(self):
        """Wrapped errors name their origin."""
        error = ApiError("something", source="somewhere")
        assert str(error) == "API error from 'somewhere': something"

    def test_attributes(self):
        """Test message, source and status code are kept."""
        error = ApiError("Test error", status_code=500)
        assert error.message == "Test error"
        assert error.source == ""
        assert error.status_code == 500
        assert error.is_application_error

    def test_is_exception(self):
        """Test that ApiError is an Exception."""
        assert isinstance(ApiError("Test"), Exception)

    def test_equality(self):
        """Errors compare by message, source and status."""
        assert ApiError("a") == ApiError("a")
        assert ApiError("a") != ApiError("a", source="io")
        assert ApiError("a", status_code=404) != ApiError("a")


class TestApiErrorConstructors:
    """Test the constructors for each failure origin."""

    def test_from_status(self):
        """Status errors embed the numeric code."""
        error = ApiError.from_status(503)
        assert str(error) == "API error: Server error, code 503"
        assert error.status_code == 503
        assert error.is_application_error

    def test_from_status_custom_prefix(self):
        error = ApiError.from_status(401, prefix="Login failed")
        assert error.message == "Login failed, code 401"

    def test_from_transport(self):
        error = ApiError.from_transport(requests.ConnectionError("refused"))
        assert error.source == SOURCE_TRANSPORT
        assert "refused" in error.message
        assert not error.is_application_error

    def test_from_io(self):
        error = ApiError.from_io(FileNotFoundError(2, "No such file"))
        assert error.source == SOURCE_IO
        assert "No such file" in error.message

    def test_from_decode(self):
        with pytest.raises(ValueError) as exc_info:
            json.loads("{not json")
        error = ApiError.from_decode(exc_info.value)
        assert error.source == SOURCE_DECODE
        assert str(error).startswith("API error from 'decode': ")

    def test_from_method(self):
        error = ApiError.from_method("GE T")
        assert error.source == SOURCE_METHOD
        assert "GE T" in error.message

    def test_raised_without_cause(self):
        """Wrapped errors are raised flat, without a cause chain."""

        def load():
            try:
                raise OSError("disk gone")
            except OSError as e:
                raise ApiError.from_io(e) from None

        with pytest.raises(ApiError) as exc_info:
            load()

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True
