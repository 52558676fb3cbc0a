"""API routes for the bridge."""

from .messages import translate_messages

__all__ = [
    "translate_messages",
]
