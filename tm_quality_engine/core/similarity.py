"""Multi-metric text similarity for translation memory lookups."""

from typing import Iterable, List, Optional, Set, Tuple

import structlog
from rapidfuzz.distance import Jaro, Levenshtein

from ..config.settings import Settings, get_settings
from ..models.similarity import ScoreWeights, SimilarityBreakdown
from .normalizer import TextNormalizer

logger = structlog.get_logger(__name__)

_MAX_PREFIX = 4


def _jaccard(set1: Set[str], set2: Set[str]) -> float:
    if not set1 or not set2:
        return 0.0
    return len(set1 & set2) / len(set1 | set2)


class SimilarityCalculator:
    """Scores text similarity by combining three complementary metrics.

    - Levenshtein (default weight 0.4): edit distance based
    - Jaro-Winkler (default weight 0.3): rewards matching prefixes, good for typos
    - Token set (default weight 0.3): order independent word overlap

    A small context boost is added when both texts share a category.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """
        Initialize the calculator.

        Args:
            settings: Engine settings (uses cached settings if None)
        """
        self.settings = settings or get_settings()
        self.normalizer = TextNormalizer()

    def calculate_similarity(
        self,
        text1: str,
        text2: str,
        weights: Optional[ScoreWeights] = None,
        category1: Optional[str] = None,
        category2: Optional[str] = None,
    ) -> SimilarityBreakdown:
        """
        Calculate the combined similarity of two texts.

        Both texts are normalized with the default options before scoring.

        Args:
            text1: First text
            text2: Second text
            weights: Score weights (uses configured weights if None)
            category1: Category of text1
            category2: Category of text2

        Returns:
            SimilarityBreakdown with per-metric scores and the combined score
        """
        weights = weights or self.settings.default_weights()
        if not weights.is_valid:
            logger.warning("score_weights_do_not_sum_to_one", total=weights.total)

        normalized1 = self.normalizer.normalize(text1)
        normalized2 = self.normalizer.normalize(text2)

        return SimilarityBreakdown(
            levenshtein_score=self.calculate_levenshtein_similarity(normalized1, normalized2),
            jaro_winkler_score=self.calculate_jaro_winkler_similarity(normalized1, normalized2),
            token_score=self.calculate_token_similarity(normalized1, normalized2),
            context_boost=self._context_boost(category1, category2),
            weights=weights,
        )

    def are_similar(
        self,
        text1: str,
        text2: str,
        threshold: Optional[float] = None,
        category1: Optional[str] = None,
        category2: Optional[str] = None,
    ) -> bool:
        """
        Check whether two texts are similar enough to reuse a translation.

        Args:
            text1: First text
            text2: Second text
            threshold: Minimum combined score (default 0.85)
            category1: Category of text1
            category2: Category of text2

        Returns:
            True if the combined score, context boost included, reaches the threshold
        """
        if threshold is None:
            threshold = self.settings.similarity_threshold

        breakdown = self.calculate_similarity(
            text1, text2, category1=category1, category2=category2
        )
        return breakdown.combined_score >= threshold

    def calculate_levenshtein_similarity(self, text1: str, text2: str) -> float:
        """
        Edit distance similarity: ``1 - distance / max_length``.

        Case-insensitive. Two empty strings are identical (1.0); a single
        empty string scores 0.0.
        """
        text1, text2 = text1.lower(), text2.lower()
        if text1 == text2:
            return 1.0
        if not text1 or not text2:
            return 0.0
        return Levenshtein.normalized_similarity(text1, text2)

    def calculate_jaro_winkler_similarity(self, text1: str, text2: str) -> float:
        """
        Jaro similarity boosted by a common prefix of up to four characters.

        ``jaro + prefix * scale * (1 - jaro)``, applied at every Jaro score.
        Case-insensitive. Identical strings score 1.0, an empty string
        against anything else scores 0.0.
        """
        text1, text2 = text1.lower(), text2.lower()
        if text1 == text2:
            return 1.0
        if not text1 or not text2:
            return 0.0

        # Fixed argument order keeps the score symmetric
        first, second = sorted((text1, text2))
        jaro = Jaro.similarity(first, second)

        prefix = 0
        for char1, char2 in zip(first[:_MAX_PREFIX], second[:_MAX_PREFIX]):
            if char1 != char2:
                break
            prefix += 1

        return jaro + prefix * self.settings.jaro_winkler_prefix_scale * (1 - jaro)

    def calculate_token_similarity(self, text1: str, text2: str) -> float:
        """
        Jaccard index of the two token sets.

        Order independent, so reordered sentences still score 1.0. Either
        text having no tokens scores 0.0.
        """
        return _jaccard(self.normalizer.tokenize(text1), self.normalizer.tokenize(text2))

    def calculate_ngram_similarity(self, text1: str, text2: str, n: Optional[int] = None) -> float:
        """
        Jaccard index of character n-gram sets.

        An auxiliary metric that is not part of the combined score; useful
        for partial matches and misspellings.

        Args:
            text1: First text
            text2: Second text
            n: N-gram size (default 2)

        Returns:
            Similarity between 0 and 1
        """
        if n is None:
            n = self.settings.ngram_size
        if text1 == text2:
            return 1.0
        if not text1 or not text2:
            return 0.0
        return _jaccard(
            self.normalizer.get_ngrams(text1, n), self.normalizer.get_ngrams(text2, n)
        )

    def rank_candidates(
        self,
        query: str,
        candidates: Iterable[str],
        threshold: Optional[float] = None,
        limit: int = 10,
        category: Optional[str] = None,
        candidate_category: Optional[str] = None,
    ) -> List[Tuple[str, SimilarityBreakdown]]:
        """
        Rank translation memory candidates against a query.

        Args:
            query: Source text to look up
            candidates: Previously translated source texts
            threshold: Minimum combined score (default 0.85)
            limit: Maximum number of results
            category: Category of the query
            candidate_category: Category shared by the candidates

        Returns:
            (candidate, breakdown) pairs sorted by combined score, best first
        """
        if threshold is None:
            threshold = self.settings.similarity_threshold

        scored = []
        for candidate in candidates:
            breakdown = self.calculate_similarity(
                query, candidate, category1=category, category2=candidate_category
            )
            if breakdown.combined_score >= threshold:
                scored.append((candidate, breakdown))

        scored.sort(key=lambda item: (-item[1].combined_score, item[0]))
        return scored[:limit]

    def _context_boost(self, category1: Optional[str], category2: Optional[str]) -> float:
        if category1 is not None and category2 is not None and category1 == category2:
            return self.settings.context_boost
        return 0.0
