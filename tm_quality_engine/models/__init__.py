"""Data models for the translation quality engine."""

from .diff import DiffSegment, DiffStats, DiffType
from .glossary import GlossaryEntry, GlossaryMatch, MatchStatistics
from .normalization import (
    DEFAULT_OPTIONS,
    LENIENT_OPTIONS,
    STRICT_OPTIONS,
    NormalizationOptions,
)
from .similarity import ScoreWeights, SimilarityBreakdown
from .validation import ValidationIssue, ValidationIssueType, ValidationSeverity

__all__ = [
    "DiffSegment",
    "DiffStats",
    "DiffType",
    "GlossaryEntry",
    "GlossaryMatch",
    "MatchStatistics",
    "NormalizationOptions",
    "DEFAULT_OPTIONS",
    "STRICT_OPTIONS",
    "LENIENT_OPTIONS",
    "ScoreWeights",
    "SimilarityBreakdown",
    "ValidationIssue",
    "ValidationIssueType",
    "ValidationSeverity",
]
