"""Shared utility functions."""

from .helpers import get_llm, message_text, utc_now

__all__ = [
    "get_llm",
    "message_text",
    "utc_now",
]
