"""Tests for the exceptions module."""

import pytest

from promptbridge.core.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    MissingOrInvalidTokenLimitError,
    ProxyError,
)


class TestProxyError:
    """Tests for the base ProxyError exception."""

    def test_creates_error_with_message(self):
        """Test that error is created with message."""
        error = ProxyError("test error message")
        assert error.message == "test error message"
        assert str(error) == "test error message"


class TestConfigurationError:
    """Tests for ConfigurationError exception."""

    def test_is_proxy_error(self):
        """Test that ConfigurationError inherits from ProxyError."""
        error = ConfigurationError("bad config")
        assert isinstance(error, ProxyError)
        assert error.message == "bad config"


class TestInvalidRequestError:
    """Tests for InvalidRequestError exception."""

    def test_default_code(self):
        """Test that default code is invalid_request."""
        error = InvalidRequestError("bad request")
        assert error.code == "invalid_request"
        assert error.param is None

    def test_custom_code_and_param(self):
        """Test that code and param can be given."""
        error = InvalidRequestError("bad", code="missing_model", param="model")
        assert error.code == "missing_model"
        assert error.param == "model"


class TestMissingOrInvalidTokenLimitError:
    """Tests for the max_tokens validation error."""

    def test_defaults(self):
        """Test the fixed message, code and param."""
        error = MissingOrInvalidTokenLimitError()
        assert error.message == "max_tokens is required for Claude requests"
        assert error.code == "invalid_max_tokens"
        assert error.param == "max_tokens"

    def test_caught_as_invalid_request(self):
        """Test callers can handle it as any invalid request."""
        with pytest.raises(InvalidRequestError):
            raise MissingOrInvalidTokenLimitError()
