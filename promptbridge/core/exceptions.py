"""Core exceptions for the bridge."""


class ProxyError(Exception):
    """Base exception for bridge errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ProxyError):
    """Raised when there's an issue with the configuration."""
    pass


class InvalidRequestError(ProxyError):
    """Raised when an incoming request is invalid."""

    def __init__(
        self,
        message: str,
        code: str = "invalid_request",
        param: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.param = param


class MissingOrInvalidTokenLimitError(InvalidRequestError):
    """Raised when a Messages request has no usable max_tokens value."""

    def __init__(self, message: str = "max_tokens is required for Claude requests") -> None:
        super().__init__(message, code="invalid_max_tokens", param="max_tokens")
