"""promptbridge - Anthropic Messages to OpenAI Chat request bridge

Flattens Anthropic Messages requests (structured content blocks) into
OpenAI Chat Completions requests (role + string content) for upstreams that
only understand prompt-based tool calling.

This module provides:
- messages_to_chat_completions: the request translation
- normalize_blocks / map_role: the building blocks it uses
- ProxyConfig / load_proxy_config: YAML + .env configuration
- create_app: a FastAPI app exposing the translation over HTTP

Example:
    >>> from promptbridge import messages_to_chat_completions
    >>> upstream = messages_to_chat_completions(
    ...     {"model": "m", "max_tokens": 100,
    ...      "messages": [{"role": "user", "content": "hello"}]}
    ... )
"""

from .config_loader import ProxyConfig, load_config, load_proxy_config
from .core import (
    ConfigurationError,
    InvalidRequestError,
    MissingOrInvalidTokenLimitError,
    ProxyError,
)
from .logging import logger, setup_logging
from .messages import (
    generate_trigger_signal,
    map_role,
    messages_to_chat_completions,
    normalize_blocks,
)

__all__ = [
    "ConfigurationError",
    "InvalidRequestError",
    "MissingOrInvalidTokenLimitError",
    "ProxyConfig",
    "ProxyError",
    "generate_trigger_signal",
    "load_config",
    "load_proxy_config",
    "logger",
    "map_role",
    "messages_to_chat_completions",
    "normalize_blocks",
    "setup_logging",
]
