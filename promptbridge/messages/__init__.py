"""Anthropic Messages API translation helpers.

Flattens Anthropic Messages requests into OpenAI Chat Completions requests
with prompt-based tool calling markup.
"""

from .translator import (
    CONTINUATION_MARKER,
    THINKING_HINT,
    map_role,
    messages_to_chat_completions,
    normalize_blocks,
    strip_protocol_tags,
)
from .trigger import generate_trigger_signal, resolve_trigger_signal

__all__ = [
    "CONTINUATION_MARKER",
    "THINKING_HINT",
    "generate_trigger_signal",
    "map_role",
    "messages_to_chat_completions",
    "normalize_blocks",
    "resolve_trigger_signal",
    "strip_protocol_tags",
]
