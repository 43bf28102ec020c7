"""Text diff models."""

import re
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field


class DiffType(str, Enum):
    """How a segment relates the old and new revisions."""

    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


class DiffSegment(BaseModel):
    """A maximal run of text with a single diff type."""

    model_config = ConfigDict(frozen=True)

    text: str
    type: DiffType


def _count_words(text: str) -> int:
    return len([word for word in re.split(r"\s+", text) if word])


class DiffStats(BaseModel):
    """Change counts folded over a diff."""

    model_config = ConfigDict(frozen=True)

    chars_added: int = Field(default=0, ge=0)
    chars_removed: int = Field(default=0, ge=0)
    chars_changed: int = Field(default=0, ge=0, description="chars_added + chars_removed")
    words_added: int = Field(default=0, ge=0)
    words_removed: int = Field(default=0, ge=0)
    words_changed: int = Field(default=0, ge=0, description="words_added + words_removed")

    @classmethod
    def from_segments(cls, segments: Iterable[DiffSegment]) -> "DiffStats":
        """
        Compute statistics from diff segments.

        Words are counted by splitting each added/removed segment on
        whitespace, so a segment such as " world" counts as one word.

        Args:
            segments: Diff segments in document order

        Returns:
            Aggregated DiffStats
        """
        chars_added = chars_removed = 0
        words_added = words_removed = 0

        for segment in segments:
            if segment.type == DiffType.ADDED:
                chars_added += len(segment.text)
                words_added += _count_words(segment.text)
            elif segment.type == DiffType.REMOVED:
                chars_removed += len(segment.text)
                words_removed += _count_words(segment.text)

        return cls(
            chars_added=chars_added,
            chars_removed=chars_removed,
            chars_changed=chars_added + chars_removed,
            words_added=words_added,
            words_removed=words_removed,
            words_changed=words_added + words_removed,
        )
