"""Translation quality checks and automatic fixes."""

import re
from typing import Callable, Dict, List, Optional, Sequence

import structlog

from ..config.settings import Settings, get_settings
from ..exceptions import NotAutoFixableError
from ..models.glossary import GlossaryEntry
from ..models.validation import ValidationIssue, ValidationIssueType, ValidationSeverity
from .glossary_matcher import GlossaryMatcher

logger = structlog.get_logger(__name__)

# {0}, [%s], %s, ${name}
_VARIABLE_PATTERN = re.compile(r"\{\d+\}|\[%[sdifgc]\]|%[sdifgc]|\$\{\w+\}")

_NUMBER_PATTERN = re.compile(r"\d+")
_NUMBER_SEPARATORS = " \u00a0\u202f,."
_NUMBER_SEPARATOR_CLASS = r"[\s\u00a0\u202f,.]"

_MARKUP_TAG = re.compile(r"<[^<>]+>|\[\[[^\[\]]*\]\]|\[(?!%[a-zA-Z]\])[^\[\]]+\]")
_TAG_NAME = re.compile(r"^(?:<|\[\[|\[)/?\s*([^\s=:/\]>]*)")
_VOID_TAGS = {"br", "hr", "img", "*"}

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")
_REPLACEMENT_CHAR = "\ufffd"

_DOUBLE_SPACES = re.compile(r" {2,}")

# Full-width forms share a class with their ASCII counterpart
_TERMINAL_PUNCTUATION = {
    ".": ".", "。": ".",
    "!": "!", "！": "!",
    "?": "?", "？": "?",
}

_ELLIPSES = ("...", "…")

Rule = Callable[[str, str], Optional[ValidationIssue]]


def _leading_whitespace(text: str) -> str:
    return text[:len(text) - len(text.lstrip())]


def _trailing_whitespace(text: str) -> str:
    stripped = text.rstrip()
    return text[len(stripped):]


def _unique(items: Sequence[str]) -> List[str]:
    """Drop duplicates while keeping first-seen order."""
    return list(dict.fromkeys(items))


class TranslationValidationService:
    """Runs independent quality rules against a source/translation pair.

    Every rule emits at most one issue, so a single call can report several
    problems at once. Some issues carry a computed replacement translation
    that ``apply_auto_fix`` hands back to the caller.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        glossary_matcher: Optional[GlossaryMatcher] = None,
    ) -> None:
        """
        Initialize the validation service.

        Args:
            settings: Engine settings (uses cached settings if None)
            glossary_matcher: Matcher used for glossary consistency checks
        """
        self.settings = settings or get_settings()
        self.glossary_matcher = glossary_matcher or GlossaryMatcher(self.settings)
        self._rules: List[Rule] = [
            self._check_empty,
            self._check_length,
            self._check_variables,
            self._check_whitespace,
            self._check_punctuation,
            self._check_case,
            self._check_modified_numbers,
            self._check_missing_numbers,
            self._check_markup,
            self._check_encoding,
            self._check_truncation,
        ]

    def validate_translation(
        self,
        source_text: str,
        translated_text: str,
        context: Optional[str] = None,
        glossary_entries: Optional[Sequence[GlossaryEntry]] = None,
    ) -> List[ValidationIssue]:
        """
        Validate a translation against its source text.

        Args:
            source_text: Original text
            translated_text: Translation to check
            context: Free-form context (unit key, file); the built-in rules ignore it
            glossary_entries: Enables the glossary consistency rule when given

        Returns:
            Issues found, in rule order (empty if the translation is clean)
        """
        issues = []
        for rule in self._rules:
            issue = rule(source_text, translated_text)
            if issue is not None:
                issues.append(issue)

        if glossary_entries:
            issue = self._check_glossary(source_text, translated_text, glossary_entries)
            if issue is not None:
                issues.append(issue)

        return issues

    def apply_auto_fix(self, translated_text: str, issue: ValidationIssue) -> str:
        """
        Apply the fix carried by an issue.

        Args:
            translated_text: Current translation
            issue: Issue whose fix should be applied

        Returns:
            The fixed translation

        Raises:
            NotAutoFixableError: If the issue is not fixable or has no fix value
        """
        if not issue.has_fix:
            logger.warning(
                "auto_fix_unavailable",
                issue_type=issue.type.value,
                auto_fixable=issue.auto_fixable,
            )
            raise NotAutoFixableError(issue)
        return issue.auto_fix_value

    def apply_all_auto_fixes(
        self,
        source_text: str,
        translated_text: str,
        issues: Sequence[ValidationIssue],
    ) -> str:
        """
        Apply every available fix in list order.

        Issues without a fix are skipped, so this never raises.

        Args:
            source_text: Original text
            translated_text: Current translation
            issues: Issues from ``validate_translation``

        Returns:
            The translation after all fixes
        """
        fixed_text = translated_text
        for issue in issues:
            if issue.has_fix:
                fixed_text = self.apply_auto_fix(fixed_text, issue)
        return fixed_text

    # Rules

    def _check_empty(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        if source_text.strip() and not translated_text.strip():
            return ValidationIssue(
                type=ValidationIssueType.EMPTY_TRANSLATION,
                severity=ValidationSeverity.ERROR,
                description="Translation is empty but source text is not",
                suggestion="Provide a translation for this text",
            )
        return None

    def _check_length(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        """Flag translations more than ``length_difference_threshold`` longer than the source."""
        if not source_text.strip() or not translated_text.strip():
            return None

        source_length = len(source_text)
        translated_length = len(translated_text)
        growth = (translated_length - source_length) / source_length

        if growth <= self.settings.length_difference_threshold:
            return None

        percent = round(growth * 100)
        return ValidationIssue(
            type=ValidationIssueType.LENGTH_DIFFERENCE,
            severity=ValidationSeverity.WARNING,
            description=f"Length difference: {percent}% (longer)",
            suggestion=(
                f"Source: {source_length} characters, Translation: {translated_length} "
                "characters. Review for accuracy, the translation may be too verbose."
            ),
            metadata={
                "source_length": source_length,
                "translated_length": translated_length,
                "difference_percent": percent,
            },
        )

    def _check_variables(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        source_variables = _unique(_VARIABLE_PATTERN.findall(source_text))
        missing = [variable for variable in source_variables if variable not in translated_text]
        if not missing:
            return None

        missing_str = ", ".join(missing)
        # Where a placeholder belongs depends on the target grammar
        return ValidationIssue(
            type=ValidationIssueType.MISSING_VARIABLES,
            severity=ValidationSeverity.ERROR,
            description=f"Missing variables: {missing_str}",
            suggestion=f"Insert the placeholders {missing_str} into the translation",
            auto_fixable=True,
            auto_fix_value=None,
            metadata={"missing_variables": missing},
        )

    def _check_whitespace(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        core = translated_text.strip()
        if not core:
            return None

        source_leading = _leading_whitespace(source_text)
        source_trailing = _trailing_whitespace(source_text)
        edge_mismatch = (
            bool(source_leading) != bool(_leading_whitespace(translated_text))
            or bool(source_trailing) != bool(_trailing_whitespace(translated_text))
        )
        double_spaces = "  " in core

        if not edge_mismatch and not double_spaces:
            return None

        problems = []
        if edge_mismatch:
            problems.append("leading or trailing whitespace mismatch")
        if double_spaces:
            problems.append("contains double spaces")

        fixed = _DOUBLE_SPACES.sub(" ", core)

        return ValidationIssue(
            type=ValidationIssueType.WHITESPACE_ISSUE,
            severity=ValidationSeverity.WARNING,
            description="Whitespace issue: " + ", ".join(problems),
            suggestion="Trim the translation and replace double spaces with single spaces",
            auto_fixable=True,
            auto_fix_value=fixed,
            metadata={"edge_mismatch": edge_mismatch, "double_spaces": double_spaces},
        )

    def _check_punctuation(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        source = source_text.strip()
        translated = translated_text.strip()
        if not source or not translated:
            return None

        source_class = _TERMINAL_PUNCTUATION.get(source[-1])
        translated_class = _TERMINAL_PUNCTUATION.get(translated[-1])
        if source_class == translated_class:
            return None

        return ValidationIssue(
            type=ValidationIssueType.PUNCTUATION_MISMATCH,
            severity=ValidationSeverity.INFO,
            description="Ending punctuation mismatch",
            suggestion=(
                f'Source ends with "{source_class or "no punctuation"}" but translation '
                f'ends with "{translated_class or "no punctuation"}"'
            ),
            metadata={
                "source_punctuation": source_class,
                "translated_punctuation": translated_class,
            },
        )

    def _check_case(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        source_letter = self._first_cased_letter(source_text)
        translated_letter = self._first_cased_letter(translated_text)
        if source_letter is None or translated_letter is None:
            return None
        if source_letter.isupper() == translated_letter.isupper():
            return None

        if source_letter.isupper():
            description = "Source starts with uppercase, translation with lowercase"
            suggestion = "Consider capitalizing the first letter of the translation"
        else:
            description = "Source starts with lowercase, translation with uppercase"
            suggestion = "Consider lowercasing the first letter of the translation"

        return ValidationIssue(
            type=ValidationIssueType.CASE_MISMATCH,
            severity=ValidationSeverity.INFO,
            description=description,
            suggestion=suggestion,
        )

    def _check_missing_numbers(
        self, source_text: str, translated_text: str
    ) -> Optional[ValidationIssue]:
        missing = [
            number
            for number in self._absent_numbers(source_text, translated_text)
            if self._find_reformatted_number(translated_text, number) is None
        ]
        if not missing:
            return None

        return ValidationIssue(
            type=ValidationIssueType.MISSING_NUMBERS,
            severity=ValidationSeverity.WARNING,
            description=f"Missing numbers: {', '.join(missing)}",
            suggestion="Ensure all numbers from the source text are present in the translation",
            metadata={"missing_numbers": missing},
        )

    def _check_modified_numbers(
        self, source_text: str, translated_text: str
    ) -> Optional[ValidationIssue]:
        """Detect numbers reformatted with separators, e.g. "13140" -> "13 140"."""
        modified: Dict[str, str] = {}
        for number in self._absent_numbers(source_text, translated_text):
            formatted = self._find_reformatted_number(translated_text, number)
            if formatted is not None:
                modified[number] = formatted

        if not modified:
            return None

        fixed = translated_text
        for original, formatted in modified.items():
            fixed = fixed.replace(formatted, original)

        modified_str = ", ".join(f'"{original}" -> "{formatted}"' for original, formatted in modified.items())
        return ValidationIssue(
            type=ValidationIssueType.MODIFIED_NUMBERS,
            severity=ValidationSeverity.ERROR,
            description=f"Numbers reformatted: {modified_str}",
            suggestion=(
                "Numbers must be preserved exactly as in the source text. They may be "
                "color codes, IDs or other technical values."
            ),
            auto_fixable=True,
            auto_fix_value=fixed,
            metadata={"modified_numbers": modified},
        )

    def _check_markup(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        source_tags = _MARKUP_TAG.findall(source_text)
        translated_tags = _MARKUP_TAG.findall(translated_text)
        if not source_tags and not translated_tags:
            return None
        if not translated_text.strip():
            return None

        if not self._tags_balanced(source_tags):
            return ValidationIssue(
                type=ValidationIssueType.MARKUP_MISMATCH,
                severity=ValidationSeverity.WARNING,
                description="Source text has unbalanced markup tags",
                suggestion="The source may be malformed; check the tags before translating",
            )

        if len(source_tags) != len(translated_tags):
            return ValidationIssue(
                type=ValidationIssueType.MARKUP_MISMATCH,
                severity=ValidationSeverity.ERROR,
                description=(
                    f"Markup tag count mismatch (source: {len(source_tags)}, "
                    f"translation: {len(translated_tags)})"
                ),
                suggestion="Keep every markup tag from the source in the translation",
                metadata={"source_tags": source_tags, "translated_tags": translated_tags},
            )

        if not self._tags_balanced(translated_tags):
            return ValidationIssue(
                type=ValidationIssueType.MARKUP_MISMATCH,
                severity=ValidationSeverity.ERROR,
                description="Unbalanced markup tags in translation",
                suggestion="Close tags in the reverse order they were opened",
                metadata={"translated_tags": translated_tags},
            )

        return None

    def _check_encoding(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        if _REPLACEMENT_CHAR in translated_text:
            return ValidationIssue(
                type=ValidationIssueType.ENCODING_ISSUE,
                severity=ValidationSeverity.ERROR,
                description="Invalid encoding: contains replacement character",
                suggestion="Re-export the translation as UTF-8",
            )

        if _CONTROL_CHARS.search(translated_text):
            return ValidationIssue(
                type=ValidationIssueType.ENCODING_ISSUE,
                severity=ValidationSeverity.WARNING,
                description="Contains invalid control characters",
                suggestion="Remove control characters from the translation",
                auto_fixable=True,
                auto_fix_value=_CONTROL_CHARS.sub("", translated_text),
            )

        return None

    def _check_truncation(self, source_text: str, translated_text: str) -> Optional[ValidationIssue]:
        if not translated_text.rstrip().endswith(_ELLIPSES):
            return None
        if source_text.rstrip().endswith(_ELLIPSES):
            return None

        return ValidationIssue(
            type=ValidationIssueType.TRUNCATED_TRANSLATION,
            severity=ValidationSeverity.WARNING,
            description="Translation may be truncated (ends with ...)",
            suggestion="Check that the translation is complete",
        )

    def _check_glossary(
        self,
        source_text: str,
        translated_text: str,
        entries: Sequence[GlossaryEntry],
    ) -> Optional[ValidationIssue]:
        violations = self.glossary_matcher.check_consistency(source_text, translated_text, entries)
        if not violations:
            return None

        return ValidationIssue(
            type=ValidationIssueType.GLOSSARY_INCONSISTENCY,
            severity=ValidationSeverity.WARNING,
            description=f"Glossary terms not used: {len(violations)}",
            suggestion="; ".join(violations),
            metadata={"violations": violations},
        )

    # Helpers

    @staticmethod
    def _first_cased_letter(text: str) -> Optional[str]:
        for char in text.strip():
            if char.isupper() or char.islower():
                return char
        return None

    @staticmethod
    def _absent_numbers(source_text: str, translated_text: str) -> List[str]:
        """Source numbers that do not appear verbatim in the translation.

        Digits inside placeholders such as ``{0}`` are not numbers.
        """
        source_numbers = _NUMBER_PATTERN.findall(_VARIABLE_PATTERN.sub(" ", source_text))
        return [
            number
            for number in _unique(source_numbers)
            if number not in translated_text
        ]

    @staticmethod
    def _find_reformatted_number(text: str, number: str) -> Optional[str]:
        """
        Find ``number`` written with grouping separators in ``text``.

        For "13140" this matches "13 140", "13,140" or "13.140" but not a
        plain "13140".
        """
        if len(number) < 2:
            return None

        stripped = text
        for separator in _NUMBER_SEPARATORS:
            stripped = stripped.replace(separator, "")
        if number not in stripped:
            return None

        pattern = re.compile(
            r"(?<!\d)" + (_NUMBER_SEPARATOR_CLASS + "?").join(number) + r"(?!\d)"
        )
        for found in pattern.finditer(text):
            candidate = found.group(0)
            if candidate != number:
                return candidate
        return None

    @staticmethod
    def _tags_balanced(tags: Sequence[str]) -> bool:
        """Check that closing tags match the most recently opened tag."""
        stack: List[str] = []
        for tag in tags:
            if tag.endswith("/>"):
                continue

            name_match = _TAG_NAME.match(tag)
            name = name_match.group(1).lower() if name_match else ""
            if name in _VOID_TAGS:
                continue

            closing = tag.startswith(("</", "[/", "[[/"))
            if not closing:
                stack.append(name)
            elif not stack or stack.pop() != name:
                return False

        return not stack
