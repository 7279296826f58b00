"""
Tests for Corkboard Formatting Utilities
"""

from datetime import datetime, timezone

from corkboard.core.entities import Message, Tombstone
from corkboard.core.thread import Thread
from corkboard.utils.formatting import (
    display_text,
    format_timestamp,
    summarize_thread,
    truncate,
)


class TestFormatting:
    """Tests for rendering helpers."""

    def test_format_timestamp(self):
        moment = datetime(2025, 12, 10, 14, 32, tzinfo=timezone.utc)

        assert format_timestamp(moment) == "2025-12-10 14:32"
        assert format_timestamp(None) == "Never"

    def test_display_text_live(self):
        assert display_text(Message(1, text="hello")) == "hello"
        assert display_text(Message(2)) == ""

    def test_display_text_tombstone(self):
        """Deleted messages only ever show the placeholder."""
        tombstone = Tombstone.from_message(Message(1, text="secret plans"))

        assert display_text(tombstone) == "[deleted]"
        assert display_text(tombstone, placeholder="(removed)") == "(removed)"

    def test_truncate(self):
        assert truncate("short") == "short"
        assert truncate("x" * 60, 10) == "xxxxxxx..."

    def test_summarize_thread(self):
        thread = Thread(3, text="Weekend meetup", created_on="2025-12-10T14:32:00Z")
        thread.mark_flagged()

        summary = summarize_thread(thread)

        assert summary.startswith("#3 2025-12-10 14:32 (0 msgs) Weekend meetup")
        assert summary.endswith("[flagged]")
