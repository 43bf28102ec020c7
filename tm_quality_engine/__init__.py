"""
TM Quality Engine - Text-quality toolkit for translation memory workflows.

This package normalizes texts for comparison, scores fuzzy similarity between
a new source text and previously translated ones, finds glossary terms,
computes revision diffs and validates translations with optional auto-fixes.
"""

__version__ = "1.0.0"

from .core.diff_calculator import DiffCalculator
from .core.glossary_matcher import GlossaryMatcher
from .core.normalizer import TextNormalizer
from .core.similarity import SimilarityCalculator
from .core.validation import TranslationValidationService
from .exceptions import NotAutoFixableError, TranslationEngineError

__all__ = [
    "TextNormalizer",
    "SimilarityCalculator",
    "GlossaryMatcher",
    "DiffCalculator",
    "TranslationValidationService",
    "TranslationEngineError",
    "NotAutoFixableError",
]
