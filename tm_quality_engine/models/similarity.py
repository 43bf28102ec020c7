"""Similarity scoring models."""

import math

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ScoreWeights(BaseModel):
    """Relative weight of each similarity metric in the combined score."""

    model_config = ConfigDict(frozen=True)

    levenshtein_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    jaro_winkler_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    token_weight: float = Field(default=0.3, ge=0.0, le=1.0)

    @property
    def total(self) -> float:
        return self.levenshtein_weight + self.jaro_winkler_weight + self.token_weight

    @property
    def is_valid(self) -> bool:
        """Weights are usable only when they sum to 1.0."""
        return math.isclose(self.total, 1.0, abs_tol=1e-9)


class SimilarityBreakdown(BaseModel):
    """Per-metric similarity scores for a pair of texts.

    ``combined_score`` is the weighted sum of the three metrics plus the
    context boost. It is not clamped, so a perfect match within the same
    category scores above 1.0.
    """

    model_config = ConfigDict(frozen=True)

    levenshtein_score: float = Field(..., ge=0.0, le=1.0, description="Edit distance similarity")
    jaro_winkler_score: float = Field(..., ge=0.0, le=1.0, description="Prefix-weighted similarity")
    token_score: float = Field(..., ge=0.0, le=1.0, description="Token set Jaccard index")
    context_boost: float = Field(default=0.0, ge=0.0, description="Bonus for matching categories")
    weights: ScoreWeights = Field(default_factory=ScoreWeights)

    @computed_field  # type: ignore[misc]
    @property
    def combined_score(self) -> float:
        return (
            self.levenshtein_score * self.weights.levenshtein_weight
            + self.jaro_winkler_score * self.weights.jaro_winkler_weight
            + self.token_score * self.weights.token_weight
            + self.context_boost
        )
