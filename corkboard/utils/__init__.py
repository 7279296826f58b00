"""Corkboard Utilities Module."""

from .formatting import format_timestamp, display_text, truncate, summarize_thread

__all__ = ["format_timestamp", "display_text", "truncate", "summarize_thread"]
