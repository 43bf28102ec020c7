"""Unit tests for the similarity calculator."""

import pytest
from tm_quality_engine.config.settings import Settings
from tm_quality_engine.core.similarity import SimilarityCalculator
from tm_quality_engine.models.similarity import ScoreWeights, SimilarityBreakdown


class TestSimilarityCalculator:
    """Test cases for the SimilarityCalculator class."""

    @pytest.fixture
    def calculator(self):
        """Create a similarity calculator with default settings."""
        return SimilarityCalculator(Settings())

    @pytest.fixture
    def sample_pairs(self):
        """Text pairs used for symmetry checks."""
        return [
            ("kitten", "sitting"),
            ("MARTHA", "MARHTA"),
            ("Save the file", "Save file"),
            ("dixon", "dicksonx"),
            ("abc", ""),
            ("Attack the castle", "The castle attack"),
        ]

    def test_calculator_initialization(self, calculator):
        """Test calculator initialization."""
        assert calculator.settings is not None
        assert calculator.normalizer is not None

    def test_identical_texts(self, calculator):
        """Test that identical texts score 1.0 on every metric."""
        result = calculator.calculate_similarity("Save the file", "Save the file")

        assert result.levenshtein_score == 1.0
        assert result.jaro_winkler_score == 1.0
        assert result.token_score == 1.0
        assert result.combined_score == pytest.approx(1.0)

    def test_normalization_before_scoring(self, calculator):
        """Test that markup and case do not affect the combined score."""
        result = calculator.calculate_similarity("<b>Hello</b>  World", "hello world")
        assert result.combined_score == pytest.approx(1.0)

    def test_levenshtein_similarity(self, calculator):
        """Test edit distance similarity."""
        assert calculator.calculate_levenshtein_similarity("kitten", "sitting") == pytest.approx(4 / 7)
        assert calculator.calculate_levenshtein_similarity("Hello", "hello") == 1.0

    def test_levenshtein_empty(self, calculator):
        """Test edit distance similarity with empty strings."""
        assert calculator.calculate_levenshtein_similarity("", "") == 1.0
        assert calculator.calculate_levenshtein_similarity("abc", "") == 0.0
        assert calculator.calculate_levenshtein_similarity("", "abc") == 0.0

    def test_jaro_winkler_similarity(self, calculator):
        """Test Jaro-Winkler against the classic reference value."""
        score = calculator.calculate_jaro_winkler_similarity("MARTHA", "MARHTA")
        assert score == pytest.approx(0.9611, abs=1e-3)

    def test_jaro_winkler_boost_below_jaro_threshold(self, calculator):
        """Test that the prefix boost also applies to dissimilar pairs."""
        # Jaro is 7/12; three shared prefix characters add 3 * 0.1 * (5/12)
        score = calculator.calculate_jaro_winkler_similarity("abcdefgh", "abcxxxxx")
        assert score == pytest.approx(7 / 12 + 0.3 * 5 / 12)

    def test_jaro_winkler_prefix_capped(self, calculator):
        """Test that only four prefix characters count."""
        # Both pairs have Jaro 0.6 and a prefix of at least four
        four = calculator.calculate_jaro_winkler_similarity("abcdxxxxxx", "abcdyyyyyy")
        six = calculator.calculate_jaro_winkler_similarity("abcdefxxxxxxxxx", "abcdefyyyyyyyyy")
        assert four == pytest.approx(0.6 + 0.4 * 0.4)
        assert six == pytest.approx(0.6 + 0.4 * 0.4)

    def test_jaro_winkler_prefix_boost(self, calculator):
        """Test that a shared prefix scores higher than a shared suffix."""
        prefix = calculator.calculate_jaro_winkler_similarity("prefixword", "prefixwork")
        suffix = calculator.calculate_jaro_winkler_similarity("prefixword", "xrefixword")
        assert prefix > suffix

    def test_jaro_winkler_edge_cases(self, calculator):
        """Test Jaro-Winkler with empty and identical strings."""
        assert calculator.calculate_jaro_winkler_similarity("", "abc") == 0.0
        assert calculator.calculate_jaro_winkler_similarity("abc", "") == 0.0
        assert calculator.calculate_jaro_winkler_similarity("Same", "same") == 1.0

    def test_token_similarity(self, calculator):
        """Test token set Jaccard index."""
        assert calculator.calculate_token_similarity("the cat sat", "sat the cat") == 1.0
        assert calculator.calculate_token_similarity("a b", "b c") == pytest.approx(1 / 3)

    def test_token_similarity_empty(self, calculator):
        """Test that an empty token set scores 0.0."""
        assert calculator.calculate_token_similarity("", "abc") == 0.0
        assert calculator.calculate_token_similarity("", "") == 0.0

    def test_symmetry(self, calculator, sample_pairs):
        """Test that every sub-metric is symmetric."""
        for a, b in sample_pairs:
            assert calculator.calculate_levenshtein_similarity(a, b) == \
                calculator.calculate_levenshtein_similarity(b, a)
            assert calculator.calculate_jaro_winkler_similarity(a, b) == \
                calculator.calculate_jaro_winkler_similarity(b, a)
            assert calculator.calculate_token_similarity(a, b) == \
                calculator.calculate_token_similarity(b, a)

    def test_context_boost(self, calculator):
        """Test the boost for matching categories."""
        same = calculator.calculate_similarity("Save", "Save", category1="ui", category2="ui")
        different = calculator.calculate_similarity("Save", "Save", category1="ui", category2="items")
        missing = calculator.calculate_similarity("Save", "Save", category1="ui")

        assert same.context_boost == pytest.approx(0.03)
        assert same.combined_score == pytest.approx(1.03)
        assert different.context_boost == 0.0
        assert missing.context_boost == 0.0

    def test_custom_weights(self, calculator):
        """Test scoring with a single metric weighted."""
        weights = ScoreWeights(levenshtein_weight=1.0, jaro_winkler_weight=0.0, token_weight=0.0)
        result = calculator.calculate_similarity("kitten", "sitting", weights=weights)

        assert result.combined_score == pytest.approx(result.levenshtein_score)
        assert result.weights == weights

    def test_are_similar(self, calculator):
        """Test threshold checks."""
        assert calculator.are_similar("Save the file", "Save the file") is True
        assert calculator.are_similar("Save the file", "Delete everything now") is False
        assert calculator.are_similar("abc", "xyz", threshold=0.0) is True

    def test_are_similar_uses_context_boost(self, calculator):
        """Test that the boost can lift a match over the threshold."""
        assert calculator.are_similar("Save", "Save", threshold=1.01) is False
        assert calculator.are_similar(
            "Save", "Save", threshold=1.01, category1="ui", category2="ui"
        ) is True

    def test_ngram_similarity(self, calculator):
        """Test the auxiliary n-gram metric."""
        assert calculator.calculate_ngram_similarity("night", "nacht") == pytest.approx(1 / 7)
        assert calculator.calculate_ngram_similarity("same", "same") == 1.0
        assert calculator.calculate_ngram_similarity("", "abc") == 0.0

    def test_rank_candidates(self, calculator):
        """Test ranking translation memory candidates."""
        candidates = ["Save the files", "Save the file", "Quit the game"]
        ranked = calculator.rank_candidates("Save the file", candidates, threshold=0.5)

        assert ranked[0][0] == "Save the file"
        assert ranked[1][0] == "Save the files"
        scores = [breakdown.combined_score for _, breakdown in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_rank_candidates_limit(self, calculator):
        """Test that rank_candidates respects the limit."""
        candidates = ["Save", "Save.", "save!", "SAVE"]
        ranked = calculator.rank_candidates("Save", candidates, threshold=0.0, limit=2)
        assert len(ranked) == 2


class TestScoreModels:
    """Test cases for the similarity models."""

    def test_default_weights_valid(self):
        """Test the default weights."""
        weights = ScoreWeights()
        assert weights.levenshtein_weight == 0.4
        assert weights.jaro_winkler_weight == 0.3
        assert weights.token_weight == 0.3
        assert weights.is_valid is True

    def test_invalid_weights(self):
        """Test weights that do not sum to one."""
        weights = ScoreWeights(levenshtein_weight=0.5, jaro_winkler_weight=0.5, token_weight=0.5)
        assert weights.is_valid is False
        assert weights.total == pytest.approx(1.5)

    def test_combined_score_not_clamped(self):
        """Test that the boost may push the score above 1.0."""
        breakdown = SimilarityBreakdown(
            levenshtein_score=1.0,
            jaro_winkler_score=1.0,
            token_score=1.0,
            context_boost=0.03,
        )
        assert breakdown.combined_score == pytest.approx(1.03)
        assert breakdown.model_dump()["combined_score"] == pytest.approx(1.03)
