"""Exceptions raised by the translation quality engine."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.validation import ValidationIssue


class TranslationEngineError(Exception):
    """Base class for engine errors."""


class NotAutoFixableError(TranslationEngineError):
    """Raised when a fix is requested for an issue that has none."""

    def __init__(self, issue: "ValidationIssue") -> None:
        """
        Initialize NotAutoFixableError.

        Args:
            issue: The issue the caller tried to fix
        """
        self.issue = issue
        reason = (
            "no fix value was computed"
            if issue.auto_fixable
            else "the issue is not marked fixable"
        )
        super().__init__(f"Issue is not auto-fixable: {issue.type.value} ({reason})")
