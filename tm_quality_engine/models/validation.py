"""Translation validation issue models."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidationSeverity(str, Enum):
    """How serious a validation issue is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ValidationIssueType(str, Enum):
    """Kinds of defect the validation rules detect."""

    EMPTY_TRANSLATION = "emptyTranslation"
    LENGTH_DIFFERENCE = "lengthDifference"
    MISSING_VARIABLES = "missingVariables"
    WHITESPACE_ISSUE = "whitespaceIssue"
    PUNCTUATION_MISMATCH = "punctuationMismatch"
    CASE_MISMATCH = "caseMismatch"
    MISSING_NUMBERS = "missingNumbers"
    MODIFIED_NUMBERS = "modifiedNumbers"
    MARKUP_MISMATCH = "markupMismatch"
    ENCODING_ISSUE = "encodingIssue"
    TRUNCATED_TRANSLATION = "truncatedTranslation"
    GLOSSARY_INCONSISTENCY = "glossaryInconsistency"


class ValidationIssue(BaseModel):
    """A single defect found in a translation."""

    model_config = ConfigDict(frozen=True)

    type: ValidationIssueType = Field(..., description="Rule that produced the issue")
    severity: ValidationSeverity = Field(..., description="Issue severity")
    description: str = Field(..., description="Human-readable description")
    auto_fixable: bool = Field(default=False, description="Whether a fix can be applied")
    auto_fix_value: Optional[str] = Field(
        None, description="Replacement translation, when one can be computed"
    )
    suggestion: Optional[str] = Field(None, description="Hint for a human reviewer")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Rule-specific details")

    @property
    def has_fix(self) -> bool:
        """True when applying the issue's fix is possible."""
        return self.auto_fixable and self.auto_fix_value is not None
