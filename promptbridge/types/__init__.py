"""Type definitions for the bridge."""

from .chat import (
    AnthropicContentBlock,
    AnthropicRequest,
    AnthropicRequestMessage,
    OpenAIChatMessage,
    OpenAIChatRequest,
    SystemTextBlock,
    TextBlock,
    ThinkingBlock,
    ThinkingConfig,
    ToolResultBlock,
    ToolResultContentItem,
    ToolUseBlock,
)

__all__ = [
    "AnthropicContentBlock",
    "AnthropicRequest",
    "AnthropicRequestMessage",
    "OpenAIChatMessage",
    "OpenAIChatRequest",
    "SystemTextBlock",
    "TextBlock",
    "ThinkingBlock",
    "ThinkingConfig",
    "ToolResultBlock",
    "ToolResultContentItem",
    "ToolUseBlock",
]
