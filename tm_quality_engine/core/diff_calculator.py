"""Character and word level diffs between two text revisions."""

import re
from typing import List, Sequence, Tuple

from ..models.diff import DiffSegment, DiffStats, DiffType

# Words and the whitespace between them, so joining tokens restores the text
_WORD_TOKEN = re.compile(r"\s+|\S+")


class DiffCalculator:
    """Computes minimal, merged diffs using a longest common subsequence."""

    def calculate_diff(self, old_text: str, new_text: str) -> List[DiffSegment]:
        """
        Calculate a character-level diff.

        Concatenating the unchanged and removed segments gives ``old_text``;
        the unchanged and added segments give ``new_text``.

        Args:
            old_text: Original text
            new_text: Modified text

        Returns:
            Merged diff segments in document order
        """
        return self._diff(list(old_text), list(new_text), old_text, new_text)

    def calculate_word_diff(self, old_text: str, new_text: str) -> List[DiffSegment]:
        """
        Calculate a word-level diff.

        Words and inter-word whitespace are compared as whole tokens, which
        reads better than a character diff for longer texts.

        Args:
            old_text: Original text
            new_text: Modified text

        Returns:
            Merged diff segments in document order
        """
        return self._diff(
            _WORD_TOKEN.findall(old_text), _WORD_TOKEN.findall(new_text), old_text, new_text
        )

    def compare(
        self, old_text: str, new_text: str, word_level: bool = False
    ) -> Tuple[List[DiffSegment], DiffStats]:
        """Diff two revisions and compute their statistics in one call."""
        if word_level:
            segments = self.calculate_word_diff(old_text, new_text)
        else:
            segments = self.calculate_diff(old_text, new_text)
        return segments, DiffStats.from_segments(segments)

    @staticmethod
    def merge_segments(segments: Sequence[DiffSegment]) -> List[DiffSegment]:
        """
        Merge adjacent segments of the same type.

        Args:
            segments: Segments in document order

        Returns:
            Equivalent list with no two neighbours sharing a type
        """
        merged: List[DiffSegment] = []
        for segment in segments:
            if merged and merged[-1].type == segment.type:
                merged[-1] = DiffSegment(text=merged[-1].text + segment.text, type=segment.type)
            else:
                merged.append(segment)
        return merged

    @staticmethod
    def reconstruct(segments: Sequence[DiffSegment]) -> Tuple[str, str]:
        """
        Rebuild both revisions from a diff.

        Returns:
            Tuple of (old_text, new_text)
        """
        old_parts = []
        new_parts = []
        for segment in segments:
            if segment.type != DiffType.ADDED:
                old_parts.append(segment.text)
            if segment.type != DiffType.REMOVED:
                new_parts.append(segment.text)
        return "".join(old_parts), "".join(new_parts)

    def _diff(
        self,
        old_tokens: Sequence[str],
        new_tokens: Sequence[str],
        old_text: str,
        new_text: str,
    ) -> List[DiffSegment]:
        if old_text == new_text:
            return [DiffSegment(text=old_text, type=DiffType.UNCHANGED)]
        if not old_text:
            return [DiffSegment(text=new_text, type=DiffType.ADDED)]
        if not new_text:
            return [DiffSegment(text=old_text, type=DiffType.REMOVED)]

        # A shared prefix and suffix are always part of an optimal alignment
        prefix = 0
        limit = min(len(old_tokens), len(new_tokens))
        while prefix < limit and old_tokens[prefix] == new_tokens[prefix]:
            prefix += 1
        suffix = 0
        while (
            suffix < limit - prefix
            and old_tokens[-1 - suffix] == new_tokens[-1 - suffix]
        ):
            suffix += 1

        old_middle = old_tokens[prefix:len(old_tokens) - suffix]
        new_middle = new_tokens[prefix:len(new_tokens) - suffix]

        segments = [DiffSegment(text=token, type=DiffType.UNCHANGED) for token in old_tokens[:prefix]]
        segments.extend(self._align(old_middle, new_middle))
        segments.extend(
            DiffSegment(text=token, type=DiffType.UNCHANGED)
            for token in old_tokens[len(old_tokens) - suffix:]
        )

        return self.merge_segments(segments)

    @staticmethod
    def _align(old: Sequence[str], new: Sequence[str]) -> List[DiffSegment]:
        """
        Walk an LCS table forwards, emitting one segment per token.

        ``lcs[i][j]`` holds the LCS length of ``old[i:]`` and ``new[j:]``.
        On ties removals are emitted before additions.
        """
        m, n = len(old), len(new)
        lcs = [[0] * (n + 1) for _ in range(m + 1)]
        for i in range(m - 1, -1, -1):
            row, below = lcs[i], lcs[i + 1]
            for j in range(n - 1, -1, -1):
                if old[i] == new[j]:
                    row[j] = below[j + 1] + 1
                else:
                    row[j] = max(below[j], row[j + 1])

        segments = []
        i = j = 0
        while i < m and j < n:
            if old[i] == new[j]:
                segments.append(DiffSegment(text=old[i], type=DiffType.UNCHANGED))
                i += 1
                j += 1
            elif lcs[i + 1][j] >= lcs[i][j + 1]:
                segments.append(DiffSegment(text=old[i], type=DiffType.REMOVED))
                i += 1
            else:
                segments.append(DiffSegment(text=new[j], type=DiffType.ADDED))
                j += 1

        segments.extend(DiffSegment(text=token, type=DiffType.REMOVED) for token in old[i:])
        segments.extend(DiffSegment(text=token, type=DiffType.ADDED) for token in new[j:])
        return segments
