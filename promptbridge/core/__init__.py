"""Core components shared across the bridge."""

from .exceptions import (
    ConfigurationError,
    InvalidRequestError,
    MissingOrInvalidTokenLimitError,
    ProxyError,
)

__all__ = [
    "ConfigurationError",
    "InvalidRequestError",
    "MissingOrInvalidTokenLimitError",
    "ProxyError",
]
