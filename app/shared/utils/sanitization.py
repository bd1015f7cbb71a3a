"""Sanitization of free-text cells before they are written to record tables.

Record rows are rendered by the dashboard, so text fields are stripped
of markup on the way in.
"""

import html
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """Sanitize user-entered text (names, notes) for storage and display."""

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    WHITESPACE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"\s+")

    @classmethod
    def sanitize_text(cls, value: str | None, max_length: int = 500) -> str:
        """Remove HTML, collapse whitespace, and truncate.

        Args:
            value: Raw text; None becomes the empty string.
            max_length: Maximum stored length.

        Returns:
            Plain text safe to store in a cell.
        """
        if not value:
            return ""
        cleaned = nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})
        # nh3 escapes entities; cells hold plain text, not HTML.
        cleaned = html.unescape(cleaned)
        cleaned = cls.WHITESPACE_PATTERN.sub(" ", cleaned).strip()
        return cleaned[:max_length]


def sanitize_text(value: str | None, max_length: int = 500) -> str:
    """Module-level shortcut for InputSanitizer.sanitize_text."""
    return InputSanitizer.sanitize_text(value, max_length)
