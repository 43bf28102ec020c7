"""Text normalization utilities for translation memory matching."""

import re
from typing import Optional, Set

from ..models.normalization import DEFAULT_OPTIONS, NormalizationOptions

# Markup: <tag attr="x">, </tag>, <br/>
_ANGLE_TAG = re.compile(r"<[^<>]+>")
# [[col:red]] ... [[/col]]
_DOUBLE_BRACKET_TAG = re.compile(r"\[\[[^\[\]]*\]\]")
# [b], [/b], [url=...]; printf placeholders such as [%s] are kept
_BRACKET_TAG = re.compile(r"\[(?!%[a-zA-Z]\])[^\[\]]+\]")

_MARKDOWN_PATTERNS = [
    re.compile(r"\*\*([^*]+)\*\*"),
    re.compile(r"__([^_]+)__"),
    re.compile(r"\*([^*]+)\*"),
    re.compile(r"_([^_]+)_"),
    re.compile(r"`([^`]+)`"),
]

_PUNCTUATION_MAP = str.maketrans({
    "“": '"',  # “
    "”": '"',  # ”
    "„": '"',  # „
    "‘": "'",  # ‘
    "’": "'",  # ’
    "–": "-",  # en dash
    "—": "-",  # em dash
})
_REPEATED_TERMINAL = re.compile(r"([!?])\1+")

# Digit-only words; whitespace delimited so removal never joins neighbours
_STANDALONE_NUMBER = re.compile(r"(?<!\S)\d+(?!\S)")

_WHITESPACE = re.compile(r"\s+")


class TextNormalizer:
    """Canonicalizes text so that translations can be compared."""

    def normalize(self, text: str, options: Optional[NormalizationOptions] = None) -> str:
        """
        Normalize text for similarity matching.

        Stages run in a fixed order: markup, punctuation, numbers, case,
        then whitespace. Each stage except whitespace is controlled by
        ``options``.

        Args:
            text: Input text to normalize
            options: Normalization options (defaults to DEFAULT_OPTIONS)

        Returns:
            Normalized text
        """
        if not text:
            return ""

        opts = options or DEFAULT_OPTIONS
        result = text

        if opts.remove_markup:
            result = self.remove_markup(result)

        if opts.normalize_punctuation:
            result = self.normalize_punctuation(result)

        if opts.remove_numbers:
            result = _STANDALONE_NUMBER.sub("", result)

        if opts.lowercase:
            result = result.lower()

        return self.normalize_whitespace(result)

    def remove_markup(self, text: str) -> str:
        """
        Strip XML, BBCode and Markdown markup, keeping the inner text.

        Nested tags are handled by repeating the pass until nothing changes.
        """
        previous = None
        result = text
        while result != previous:
            previous = result
            result = _ANGLE_TAG.sub("", result)
            result = _DOUBLE_BRACKET_TAG.sub("", result)
            result = _BRACKET_TAG.sub("", result)
            for pattern in _MARKDOWN_PATTERNS:
                result = pattern.sub(r"\1", result)
        return result

    def normalize_punctuation(self, text: str) -> str:
        """Map typographic punctuation to ASCII and collapse repeated !/?."""
        result = text.translate(_PUNCTUATION_MAP)
        result = result.replace("…", "...")
        return _REPEATED_TERMINAL.sub(r"\1", result)

    def normalize_whitespace(self, text: str) -> str:
        """Collapse whitespace runs to a single space and trim."""
        return _WHITESPACE.sub(" ", text).strip()

    def tokenize(self, text: str) -> Set[str]:
        """
        Tokenize text into a set of normalized words.

        Args:
            text: Input text

        Returns:
            Set of distinct tokens (empty for blank text)
        """
        normalized = self.normalize(text)
        return {token for token in normalized.split(" ") if token}

    def get_ngrams(self, text: str, n: int = 2) -> Set[str]:
        """
        Generate character n-grams.

        "hello" with n=2 gives {"he", "el", "ll", "lo"}. Text shorter than
        ``n`` (including the empty string) yields a single n-gram holding
        the whole text.

        Args:
            text: Text to process
            n: N-gram size

        Returns:
            Set of n-grams
        """
        if len(text) < n or n < 1:
            return {text}
        return {text[i:i + n] for i in range(len(text) - n + 1)}
