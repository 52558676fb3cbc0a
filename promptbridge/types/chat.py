"""Wire types for the two chat schemas handled by the bridge.

Types are separated into:
- Anthropic Messages types: the structured request accepted from clients
- OpenAI-compatible types: the flattened request sent upstream

The translator reads payloads as plain mappings and dispatches on the
``type`` key of each content block; these TypedDicts document the shape.
"""

from typing import Any, Literal, Union
from typing_extensions import TypedDict


# =============================================================================
# Anthropic Messages Types
# =============================================================================


class TextBlock(TypedDict, total=False):
    """A plain text content block.

    Attributes:
        type: Always "text".
        text: Raw text. May contain injected protocol markup, which is
            stripped during translation.
    """
    type: Literal["text"]
    text: str


class ThinkingBlock(TypedDict, total=False):
    """A reasoning block produced by the model.

    Attributes:
        type: Always "thinking".
        thinking: Raw reasoning text, passed through verbatim.
        signature: Opaque signature attached by the upstream API.
    """
    type: Literal["thinking"]
    thinking: str
    signature: str | None


class ToolUseBlock(TypedDict, total=False):
    """A tool invocation requested by the assistant.

    Attributes:
        type: Always "tool_use".
        id: Identifier referenced by the matching tool_result.
        name: Tool name.
        input: Mapping of parameter name to value.
    """
    type: Literal["tool_use"]
    id: str
    name: str
    input: dict[str, Any]


class ToolResultContentItem(TypedDict, total=False):
    """An entry of a list-form tool_result content."""
    type: str
    text: str


class ToolResultBlock(TypedDict, total=False):
    """The result of a completed tool call.

    Attributes:
        type: Always "tool_result".
        tool_use_id: Identifier of the tool_use block this answers.
        content: A string, a list of typed items (only "text" items are
            kept), an arbitrary JSON object, or None.
        is_error: Whether the tool reported an error.
    """
    type: Literal["tool_result"]
    tool_use_id: str
    content: Union[str, list[ToolResultContentItem], dict[str, Any], None]
    is_error: bool | None


AnthropicContentBlock = Union[TextBlock, ThinkingBlock, ToolUseBlock, ToolResultBlock]


class SystemTextBlock(TypedDict, total=False):
    """A block of the list form of the top-level system prompt."""
    type: str
    text: str


class ThinkingConfig(TypedDict, total=False):
    """Extended thinking settings of a Messages request.

    Attributes:
        type: "enabled" turns thinking on; any other value leaves it off.
        budget_tokens: Reasoning budget requested by the client.
    """
    type: str
    budget_tokens: int | None


class AnthropicRequestMessage(TypedDict, total=False):
    """A message of a Messages request.

    Attributes:
        role: "user" or "assistant". Any other value is treated as "user".
        content: A plain string or an ordered list of content blocks.
    """
    role: str
    content: Union[str, list[AnthropicContentBlock]]


class AnthropicRequest(TypedDict, total=False):
    """An Anthropic Messages API request body (POST /v1/messages).

    Attributes:
        model: Model requested by the client.
        max_tokens: Required output token limit.
        temperature: Sampling temperature.
        top_p: Nucleus sampling value.
        system: System prompt as a string or list of text blocks.
        thinking: Extended thinking settings.
        messages: Conversation turns in order.
        stream: Client streaming preference (ignored, upstream always streams).
    """
    model: str
    max_tokens: int | float
    temperature: float | None
    top_p: float | None
    system: Union[str, list[SystemTextBlock], None]
    thinking: ThinkingConfig | None
    messages: list[AnthropicRequestMessage]
    stream: bool | None


# =============================================================================
# OpenAI-Compatible Types
# =============================================================================


class OpenAIChatMessage(TypedDict):
    """A flattened chat message: a role and one string of content."""
    role: Literal["system", "user", "assistant"]
    content: str


class OpenAIChatRequest(TypedDict):
    """An OpenAI Chat Completions request body sent upstream.

    Attributes:
        model: Upstream model name.
        stream: Always True.
        temperature: Sampling temperature, 0.2 when the client sent none.
        top_p: Nucleus sampling value, 1 when the client sent none.
        max_tokens: Output token limit copied from the client request.
        messages: Flattened messages in order.
    """
    model: str
    stream: bool
    temperature: float
    top_p: float
    max_tokens: int | float
    messages: list[OpenAIChatMessage]
