"""Core matching, diffing and validation components."""

from .diff_calculator import DiffCalculator
from .glossary_matcher import GlossaryMatcher
from .normalizer import TextNormalizer
from .similarity import SimilarityCalculator
from .validation import TranslationValidationService

__all__ = [
    "TextNormalizer",
    "SimilarityCalculator",
    "GlossaryMatcher",
    "DiffCalculator",
    "TranslationValidationService",
]
