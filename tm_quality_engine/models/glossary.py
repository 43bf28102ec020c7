"""Glossary entry and match models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GlossaryEntry(BaseModel):
    """A source term and its mandated translation."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Entry identifier")
    glossary_id: str = Field(..., description="Owning glossary identifier")
    source_term: str = Field(..., min_length=1, description="Term to look for in source text")
    target_term: str = Field(..., description="Translation to use for the term")
    target_language_code: str = Field(..., description="Language of target_term")
    case_sensitive: bool = Field(default=False, description="Match source_term case-sensitively")


class GlossaryMatch(BaseModel):
    """An occurrence of a glossary term in scanned text."""

    model_config = ConfigDict(frozen=True)

    entry: GlossaryEntry
    start_index: int = Field(..., ge=0, description="Start offset in the scanned text")
    end_index: int = Field(..., ge=0, description="End offset (exclusive)")
    matched_text: str = Field(..., description="Exact substring of the scanned text")

    @model_validator(mode="after")
    def check_span(self) -> "GlossaryMatch":
        """Reject spans that end before they start."""
        if self.end_index < self.start_index:
            raise ValueError("end_index must not precede start_index")
        return self

    @property
    def length(self) -> int:
        return self.end_index - self.start_index

    def overlaps(self, other: "GlossaryMatch") -> bool:
        """Check whether two spans share at least one character."""
        return self.start_index < other.end_index and other.start_index < self.end_index


class MatchStatistics(BaseModel):
    """Aggregate figures about glossary matches in a text."""

    model_config = ConfigDict(frozen=True)

    total_matches: int = Field(default=0, ge=0)
    unique_terms: int = Field(default=0, ge=0, description="Distinct entries matched")
    coverage_percent: float = Field(default=0.0, ge=0.0, description="Share of characters covered")
