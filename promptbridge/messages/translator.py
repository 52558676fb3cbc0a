"""Anthropic Messages -> OpenAI Chat Completions request translation.

This module flattens an Anthropic Messages request into an OpenAI Chat
Completions request whose messages carry a single string of content each.
Tool calls are not mapped to OpenAI ``tool_calls``; they are re-serialized as
``<invoke>`` markup inside the text so that prompt-based tool calling works
against any OpenAI-compatible upstream.

Key mappings:
- Anthropic system (top-level) -> first OpenAI system message
- text blocks -> text with injected protocol markup stripped
- thinking blocks -> <thinking>...</thinking>
- tool_use blocks -> [trigger signal] + <invoke name="..."> with <parameter> lines
- tool_result blocks -> labelled plain text
- roles -> "assistant" or "user"

The upstream request always streams, and the last message gets a trailing
continuation marker appended.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Mapping, Sequence

from ..config_loader import ProxyConfig
from ..core.exceptions import MissingOrInvalidTokenLimitError
from ..types.chat import (
    AnthropicContentBlock,
    AnthropicRequest,
    OpenAIChatMessage,
    OpenAIChatRequest,
    SystemTextBlock,
)

logger = logging.getLogger("promptbridge")

THINKING_HINT = (
    "<antml\b:thinking_mode>interleaved</antml>"
    "<antml\b:max_thinking_length>16000</antml>"
)
THINKING_START_TAG = "<thinking>"
THINKING_END_TAG = "</thinking>"
CONTINUATION_MARKER = (
    "\n\n<antml\\b:role>\n\nPlease continue responding as an assistant.\n\n</antml>"
)
TOOL_RESULT_LABEL = "[工具调用结果 - ID: {tool_use_id}]"

DEFAULT_TEMPERATURE = 0.2
DEFAULT_TOP_P = 1

# Non-greedy so two invocations in one string are removed separately
INVOKE_TAG_RE = re.compile(r"<invoke\b[^>]*>.*?</invoke>", re.IGNORECASE | re.DOTALL)
TOOL_RESULT_TAG_RE = re.compile(
    r"<tool_result\b[^>]*>.*?</tool_result>", re.IGNORECASE | re.DOTALL
)


def strip_protocol_tags(text: str) -> str:
    """Remove <invoke> and <tool_result> spans, including their contents.

    Genuine invocations are only ever produced from tool_use blocks, so any
    such markup found in free text is dropped rather than escaped.
    """
    text = INVOKE_TAG_RE.sub("", text)
    return TOOL_RESULT_TAG_RE.sub("", text)


def _to_json_text(value: Any, indent: int | None = None) -> str:
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def _resolve_tool_result_content(content: Any) -> str:
    """Flatten tool_result content into one string.

    Precedence: string as-is, list keeps only "text" items joined by newline,
    any other value is dumped as indented JSON, None becomes "".
    """
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "\n".join(
            _item_text(item.get("text"))
            for item in content
            if isinstance(item, Mapping) and item.get("type") == "text"
        )
    return _to_json_text(content, indent=2)


def _item_text(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return _to_json_text(value)


def _text_field(value: Any, where: str) -> str:
    """Return a text field, or "" when it is missing or not a string."""
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug(f"Ignoring non-string text in {where}: {type(value).__name__}")
    return ""


def _render_tool_use(block: Mapping[str, Any], trigger_signal: str | None) -> str:
    tool_input = block.get("input")
    if not isinstance(tool_input, Mapping):
        tool_input = {}

    params = "\n".join(
        f'<parameter name="{key}">'
        f"{value if isinstance(value, str) else _to_json_text(value)}"
        "</parameter>"
        for key, value in tool_input.items()
    )
    trigger = f"{trigger_signal}\n" if trigger_signal else ""
    return f'{trigger}<invoke name="{block.get("name", "")}">\n{params}\n</invoke>'


def _normalize_block(block: Any, trigger_signal: str | None) -> str:
    if not isinstance(block, Mapping):
        logger.debug(f"Dropping non-object content block: {type(block).__name__}")
        return ""

    block_type = block.get("type")

    if block_type == "text":
        return strip_protocol_tags(_text_field(block.get("text"), "text block"))

    if block_type == "thinking":
        # Model's own reasoning channel, passed through untouched
        return f"{THINKING_START_TAG}{block.get('thinking') or ''}{THINKING_END_TAG}"

    if block_type == "tool_result":
        label = TOOL_RESULT_LABEL.format(tool_use_id=block.get("tool_use_id", ""))
        return f"{label}\n{_resolve_tool_result_content(block.get('content'))}"

    if block_type == "tool_use":
        return _render_tool_use(block, trigger_signal)

    logger.debug(f"Dropping unsupported content block type: {block_type}")
    return ""


def normalize_blocks(
    content: str | Sequence[AnthropicContentBlock] | None,
    trigger_signal: str | None = None,
) -> str:
    """Flatten message content into a single sanitized string.

    Args:
        content: A plain string or an ordered list of Anthropic content blocks.
        trigger_signal: Marker written on the line before every <invoke>
            rendered from a tool_use block. Omitted when empty.

    Returns:
        The per-block texts joined with newlines. Unknown blocks contribute
        an empty string.
    """
    if isinstance(content, str):
        return strip_protocol_tags(content)
    if not isinstance(content, list):
        if content is not None:
            logger.debug(f"Unexpected message content type: {type(content).__name__}")
        return ""
    return "\n".join(_normalize_block(block, trigger_signal) for block in content)


def map_role(role: Any) -> str:
    """Map an Anthropic role to the upstream vocabulary."""
    return "assistant" if role == "assistant" else "user"


def _validate_max_tokens(value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MissingOrInvalidTokenLimitError()
    if isinstance(value, float) and math.isnan(value):
        raise MissingOrInvalidTokenLimitError()


def _system_to_text(system: str | Sequence[SystemTextBlock | str]) -> str:
    """Concatenate the system prompt into one string (no sanitization)."""
    if isinstance(system, str):
        return system
    if not isinstance(system, list):
        system = [system]

    parts: list[str] = []
    for block in system:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, Mapping):
            parts.append(_text_field(block.get("text"), "system block"))
        else:
            parts.append("")
    return "\n".join(parts)


def _has_tool_result(content: Any) -> bool:
    return isinstance(content, list) and any(
        isinstance(block, Mapping) and block.get("type") == "tool_result"
        for block in content
    )


def _thinking_enabled(payload: AnthropicRequest) -> bool:
    thinking = payload.get("thinking")
    return isinstance(thinking, Mapping) and thinking.get("type") == "enabled"


def messages_to_chat_completions(
    payload: AnthropicRequest,
    config: ProxyConfig | None = None,
    trigger_signal: str | None = None,
) -> OpenAIChatRequest:
    """Translate an Anthropic Messages request to an OpenAI Chat Completions request.

    Handles:
    - max_tokens validation (fails before anything else)
    - Top-level system parameter -> system message
    - Content blocks (text, thinking, tool_use, tool_result) -> flat strings
    - Thinking hint on user turns when thinking is enabled
    - Trailing continuation marker on the last message
    - Model override, sampling defaults and forced streaming

    Args:
        payload: Anthropic Messages API request body
        config: Resolved settings supplying ``upstream_model_override``,
            or None for no override
        trigger_signal: Marker placed before re-serialized tool invocations

    Returns:
        OpenAI Chat Completions API request body

    Raises:
        MissingOrInvalidTokenLimitError: max_tokens is absent, not a number,
            or NaN.
    """
    max_tokens = payload.get("max_tokens")
    _validate_max_tokens(max_tokens)

    openai_messages: list[OpenAIChatMessage] = []

    system = payload.get("system")
    if system:
        openai_messages.append({"role": "system", "content": _system_to_text(system)})

    thinking_enabled = _thinking_enabled(payload)

    messages = payload.get("messages")
    if not isinstance(messages, list):
        if messages is not None:
            logger.debug(f"Ignoring non-list messages: {type(messages).__name__}")
        messages = []

    for message in messages:
        if not isinstance(message, Mapping):
            logger.debug(f"Dropping non-object message: {type(message).__name__}")
            continue
        role = message.get("role")
        raw_content = message.get("content")
        content = normalize_blocks(raw_content, trigger_signal)

        # Keep the hint away from machine-readable tool results
        if role == "user" and thinking_enabled and not _has_tool_result(raw_content):
            content = content + THINKING_HINT
            logger.debug("Appended thinking hint to user message")

        openai_messages.append({"role": map_role(role), "content": content})

    if openai_messages:
        openai_messages[-1]["content"] = openai_messages[-1]["content"] + CONTINUATION_MARKER

    override = getattr(config, "upstream_model_override", None)
    model = override if override is not None else payload.get("model")

    temperature = payload.get("temperature")
    top_p = payload.get("top_p")

    logger.info(
        f"Translated Messages request: model={model}, "
        f"messages={len(openai_messages)}, thinking={thinking_enabled}"
    )

    return {
        "model": model,
        "stream": True,
        "temperature": temperature if temperature is not None else DEFAULT_TEMPERATURE,
        "top_p": top_p if top_p is not None else DEFAULT_TOP_P,
        "max_tokens": max_tokens,
        "messages": openai_messages,
    }
