"""API module for the bridge."""

from .routes import translate_messages

__all__ = [
    "translate_messages",
]
