"""
Corkboard Formatting Utilities

Helpers for view layers that render boards, threads and messages.
"""

from datetime import datetime
from typing import Optional

from ..core.entities import ContentEntity, Tombstone


def format_timestamp(moment: Optional[datetime]) -> str:
    """
    Format a timestamp to a human-readable string.

    Args:
        moment: Aware or naive datetime

    Returns:
        Formatted string like "2025-12-10 14:32"
    """
    if moment is None:
        return "Never"

    return moment.strftime("%Y-%m-%d %H:%M")


def display_text(item: ContentEntity, placeholder: str = Tombstone.PLACEHOLDER) -> str:
    """
    Text to show for an item.

    Tombstones always render as the placeholder, never as their former
    content.
    """
    if isinstance(item, Tombstone):
        return placeholder

    return getattr(item, "text", None) or ""


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix


def summarize_thread(thread, width: int = 50) -> str:
    """One-line listing entry: id, last activity, message count and title."""
    title = truncate(display_text(thread), width) or "(untitled)"
    flag = " [flagged]" if thread.flagged else ""
    return (
        f"#{thread.id} {format_timestamp(thread.bumped_on)} "
        f"({len(thread)} msgs) {title}{flag}"
    )
