"""Glossary term matching, substitution and highlighting."""

import re
from typing import Dict, List, Optional, Sequence

from ..config.settings import Settings, get_settings
from ..models.glossary import GlossaryEntry, GlossaryMatch, MatchStatistics


class GlossaryMatcher:
    """Finds glossary terms in text.

    Supports case-sensitive and case-insensitive entries, whole-word
    matching, several occurrences of the same term, and resolves
    overlapping candidates so the longest term wins.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize the matcher.

        Args:
            settings: Engine settings (uses cached settings if None)
        """
        self.settings = settings or get_settings()

    def find_matches(
        self,
        text: str,
        entries: Sequence[GlossaryEntry],
        whole_word_only: bool = True,
    ) -> List[GlossaryMatch]:
        """
        Find all non-overlapping glossary term occurrences in text.

        Args:
            text: Text to scan for glossary terms
            entries: Glossary entries to look for
            whole_word_only: Only accept occurrences bounded by non-alphanumerics

        Returns:
            Matches sorted by start index
        """
        if not text or not entries:
            return []

        candidates: List[GlossaryMatch] = []
        for entry in entries:
            candidates.extend(self._find_term_matches(text, entry, whole_word_only))

        matches = self._remove_overlaps(candidates)
        matches.sort(key=lambda match: match.start_index)
        return matches

    def apply_substitutions(
        self,
        source_text: str,
        target_text: str,
        matches: Sequence[GlossaryMatch],
    ) -> str:
        """
        Replace matched source terms in a target text with their translations.

        Source and target offsets diverge, so each match is located in the
        target by searching for its matched text and every occurrence is
        replaced. Matches whose text does not appear in the target are
        skipped.

        Args:
            source_text: Text the matches were found in
            target_text: Translation to apply substitutions to
            matches: Matches from ``find_matches(source_text, ...)``

        Returns:
            Target text with substitutions applied
        """
        result = target_text
        for match in matches:
            pattern = self._compile(match.matched_text, match.entry.case_sensitive)
            target_term = match.entry.target_term
            result = pattern.sub(lambda _: target_term, result)
        return result

    def highlight_matches(
        self,
        text: str,
        matches: Sequence[GlossaryMatch],
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
    ) -> str:
        """
        Wrap every matched span in highlight markers.

        Args:
            text: Text the matches were found in
            matches: Matches to highlight
            prefix: Marker inserted before a match (default "**")
            suffix: Marker inserted after a match (default "**")

        Returns:
            Text with markers inserted
        """
        prefix = self.settings.highlight_prefix if prefix is None else prefix
        suffix = self.settings.highlight_suffix if suffix is None else suffix

        result = text
        # Back to front so earlier offsets stay valid
        for match in sorted(matches, key=lambda m: m.start_index, reverse=True):
            result = (
                result[:match.start_index]
                + prefix
                + result[match.start_index:match.end_index]
                + suffix
                + result[match.end_index:]
            )
        return result

    def get_match_statistics(
        self, text: str, matches: Sequence[GlossaryMatch]
    ) -> MatchStatistics:
        """
        Summarize matches found in a text.

        Args:
            text: Text the matches were found in
            matches: Matches to summarize

        Returns:
            MatchStatistics with total matches, distinct entries and coverage
        """
        if not text:
            return MatchStatistics()

        covered = sum(match.length for match in matches)
        return MatchStatistics(
            total_matches=len(matches),
            unique_terms=len({match.entry.id for match in matches}),
            coverage_percent=covered / len(text) * 100,
        )

    def check_consistency(
        self,
        source_text: str,
        target_text: str,
        entries: Sequence[GlossaryEntry],
        whole_word_only: bool = True,
    ) -> List[str]:
        """
        Verify that glossary terms found in the source use their mandated translation.

        Args:
            source_text: Source text to find terms in
            target_text: Translation to check
            entries: Glossary entries
            whole_word_only: Passed through to ``find_matches``

        Returns:
            One message per entry whose target term is missing (empty if consistent)
        """
        matched: Dict[str, GlossaryEntry] = {}
        for match in self.find_matches(source_text, entries, whole_word_only):
            matched.setdefault(match.entry.id, match.entry)

        inconsistencies = []
        for entry in matched.values():
            if not self._compile(entry.target_term, entry.case_sensitive).search(target_text):
                inconsistencies.append(
                    f'Term "{entry.source_term}" should be translated as '
                    f'"{entry.target_term}" but was not found in the translation'
                )
        return inconsistencies

    def _find_term_matches(
        self, text: str, entry: GlossaryEntry, whole_word_only: bool
    ) -> List[GlossaryMatch]:
        """Find every occurrence of a single entry's source term."""
        pattern = self._compile(entry.source_term, entry.case_sensitive)
        matches = []

        position = 0
        while True:
            found = pattern.search(text, position)
            if found is None:
                break

            start, end = found.span()
            if whole_word_only and not self._is_whole_word(text, start, end):
                position = start + 1
                continue

            matches.append(
                GlossaryMatch(
                    entry=entry,
                    start_index=start,
                    end_index=end,
                    matched_text=found.group(0),
                )
            )
            position = end

        return matches

    @staticmethod
    def _remove_overlaps(candidates: List[GlossaryMatch]) -> List[GlossaryMatch]:
        """
        Greedy interval selection: longest first, earliest start on ties.

        A candidate is kept only if it shares no character with an already
        kept match, so "heavy cavalry" beats "heavy" and "cavalry".
        """
        ordered = sorted(candidates, key=lambda m: (-m.length, m.start_index))
        kept: List[GlossaryMatch] = []
        for candidate in ordered:
            if not any(candidate.overlaps(other) for other in kept):
                kept.append(candidate)
        return kept

    @staticmethod
    def _is_whole_word(text: str, start: int, end: int) -> bool:
        if start > 0 and text[start - 1].isalnum():
            return False
        if end < len(text) and text[end].isalnum():
            return False
        return True

    @staticmethod
    def _compile(term: str, case_sensitive: bool) -> "re.Pattern[str]":
        flags = 0 if case_sensitive else re.IGNORECASE
        return re.compile(re.escape(term), flags)
