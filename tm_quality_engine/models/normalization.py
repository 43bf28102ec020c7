"""Options controlling text normalization."""

from pydantic import BaseModel, ConfigDict, Field


class NormalizationOptions(BaseModel):
    """Which normalization stages to apply to a text."""

    model_config = ConfigDict(frozen=True)

    remove_markup: bool = Field(default=True, description="Strip XML, BBCode and Markdown markup")
    lowercase: bool = Field(default=True, description="Fold case")
    normalize_punctuation: bool = Field(
        default=True, description="Straighten quotes, dashes, ellipsis and repeated !/?"
    )
    remove_numbers: bool = Field(default=False, description="Delete standalone numbers")

    @classmethod
    def default(cls) -> "NormalizationOptions":
        """Everything except number removal."""
        return DEFAULT_OPTIONS

    @classmethod
    def strict(cls) -> "NormalizationOptions":
        """Every normalization stage."""
        return STRICT_OPTIONS

    @classmethod
    def lenient(cls) -> "NormalizationOptions":
        """Markup removal only."""
        return LENIENT_OPTIONS


DEFAULT_OPTIONS = NormalizationOptions()

STRICT_OPTIONS = NormalizationOptions(
    remove_markup=True,
    lowercase=True,
    normalize_punctuation=True,
    remove_numbers=True,
)

LENIENT_OPTIONS = NormalizationOptions(
    remove_markup=True,
    lowercase=False,
    normalize_punctuation=False,
    remove_numbers=False,
)
