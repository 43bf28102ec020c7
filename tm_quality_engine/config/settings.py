"""Engine settings and configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.similarity import ScoreWeights


class Settings(BaseSettings):
    """Engine settings with environment variable support."""

    # Application
    app_name: str = Field(default="Translation Memory & Quality Engine")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    # Similarity scoring
    levenshtein_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    jaro_winkler_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    token_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    context_boost: float = Field(default=0.03, ge=0.0)
    similarity_threshold: float = Field(default=0.85, ge=0.0)
    jaro_winkler_prefix_scale: float = Field(default=0.1, ge=0.0, le=0.25)
    ngram_size: int = Field(default=2, ge=1)

    # Validation
    length_difference_threshold: float = Field(default=1.0, gt=0.0)  # 100%

    # Glossary highlighting
    highlight_prefix: str = Field(default="**")
    highlight_suffix: str = Field(default="**")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    def default_weights(self) -> ScoreWeights:
        """Build the score weights configured for this engine."""
        return ScoreWeights(
            levenshtein_weight=self.levenshtein_weight,
            jaro_winkler_weight=self.jaro_winkler_weight,
            token_weight=self.token_weight,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached engine settings."""
    return Settings()
