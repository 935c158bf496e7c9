"""Fixed-width text placement for short metadata strings."""

from __future__ import annotations

from dataclasses import dataclass

from ...config import DEFAULT_CHAR_WIDTH


@dataclass(frozen=True, slots=True)
class TextLayout:
    """Approximate text metrics: every character advances ``char_width`` px.

    Not real glyph shaping. Good enough to center a description or
    right-align a date; switching to true glyph metrics would move text
    by a few pixels.
    """
    char_width: int = DEFAULT_CHAR_WIDTH

    def text_width(self, text: str) -> int:
        return len(text) * self.char_width

    def centered_x(self, text: str, total_width: int) -> int:
        """Left x that centers ``text`` in ``[0, total_width)``. May be negative."""
        return (total_width - self.text_width(text)) // 2

    def right_aligned_x(self, text: str, right_x: int) -> int:
        """Left x that makes ``text`` end at ``right_x``."""
        return right_x - self.text_width(text)
