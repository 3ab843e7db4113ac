"""Exceptions raised while turning feature text into a document model."""

from __future__ import annotations

from enum import Enum


class GherkinErrorKind(str, Enum):
    """What went wrong when a document failed to parse."""
    MISSING_EXAMPLES = "MissingExamples"
    UNEXPECTED_LINE = "UnexpectedLine"
    UNEXPECTED_END_OF_INPUT = "UnexpectedEndOfInput"
    STEP_ARGUMENT_CONFLICT = "StepArgumentConflict"
    MALFORMED_TABLE = "MalformedTable"
    UNKNOWN_KEYWORD = "UnknownKeyword"
    SYNTAX_ERROR = "SyntaxError"


class GherkinError(Exception):
    """Base class for every error raised by this package."""


class GherkinSyntaxError(GherkinError):
    """Raised when the text is not a valid feature document.

    Carries the error ``kind`` and the 1-based source ``line`` at which the
    problem was detected.
    """

    def __init__(self, kind: GherkinErrorKind, line: int, detail: str = "") -> None:
        self.kind = kind
        self.line = line
        self.detail = detail
        message = f"line {line}: {kind.value}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class FeatureDecodeError(GherkinError, ValueError):
    """Raised when a byte buffer cannot be decoded to text."""

    def __init__(self, encoding: str, position: int, reason: str) -> None:
        self.encoding = encoding
        self.position = position
        super().__init__(
            f"Cannot decode feature bytes as {encoding} at byte {position}: {reason}"
        )
