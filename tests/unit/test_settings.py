"""Unit tests for configuration and logging setup."""

import structlog
from tm_quality_engine.config import Settings, configure_logging, get_settings
from tm_quality_engine.exceptions import NotAutoFixableError, TranslationEngineError
from tm_quality_engine.models.validation import (
    ValidationIssue,
    ValidationIssueType,
    ValidationSeverity,
)


class TestSettings:
    """Test cases for engine settings."""

    def test_defaults(self):
        """Test the tuned default constants."""
        settings = Settings()

        assert settings.context_boost == 0.03
        assert settings.similarity_threshold == 0.85
        assert settings.jaro_winkler_prefix_scale == 0.1
        assert settings.length_difference_threshold == 1.0
        assert settings.ngram_size == 2
        assert settings.highlight_prefix == "**"

    def test_environment_override(self, monkeypatch):
        """Test reading settings from environment variables."""
        monkeypatch.setenv("SIMILARITY_THRESHOLD", "0.7")
        monkeypatch.setenv("CONTEXT_BOOST", "0.05")

        settings = Settings()
        assert settings.similarity_threshold == 0.7
        assert settings.context_boost == 0.05

    def test_default_weights(self):
        """Test building score weights from settings."""
        weights = Settings(levenshtein_weight=0.5, jaro_winkler_weight=0.25, token_weight=0.25).default_weights()

        assert weights.levenshtein_weight == 0.5
        assert weights.is_valid is True

    def test_get_settings_cached(self):
        """Test that settings are cached."""
        assert get_settings() is get_settings()


class TestLogging:
    """Test cases for logging configuration."""

    def test_configure_console_logging(self):
        """Test configuring the console renderer."""
        configure_logging(level="debug", fmt="console")
        logger = structlog.get_logger("tm_quality_engine.test")
        logger.debug("logging_configured", renderer="console")

    def test_configure_json_logging(self):
        """Test configuring the JSON renderer."""
        configure_logging(level="INFO", fmt="json")
        structlog.get_logger("tm_quality_engine.test").info("logging_configured", renderer="json")


class TestExceptions:
    """Test cases for engine exceptions."""

    def test_not_auto_fixable_error(self):
        """Test the error message and hierarchy."""
        issue = ValidationIssue(
            type=ValidationIssueType.CASE_MISMATCH,
            severity=ValidationSeverity.INFO,
            description="Case mismatch",
        )
        error = NotAutoFixableError(issue)

        assert isinstance(error, TranslationEngineError)
        assert error.issue is issue
        assert "caseMismatch" in str(error)
