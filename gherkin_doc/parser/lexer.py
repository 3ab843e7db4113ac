"""Line classifier for Gherkin feature text.

Splits raw text into numbered lines and tags each one with its shape (tag
line, section keyword, step, table row, doc-string fence, free text, blank or
comment). Indentation never matters. Between a pair of doc-string fences every
line is captured verbatim as text, whatever it looks like.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from .errors import GherkinErrorKind, GherkinSyntaxError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# "Scenario Outline" must be tried before "Scenario".
SECTION_KEYWORDS = ("Feature", "Background", "Scenario Outline", "Scenario", "Examples")
STEP_KEYWORDS = ("Given", "When", "Then", "And", "But")
DOC_FENCE = '"""'

_KEYWORD_SHAPE = re.compile(r"^[A-Z][A-Za-z]*(?: [A-Za-z]+)*:")
_ESCAPES = {"|": "|", "n": "\n", "\\": "\\"}


class LineKind(str, Enum):
    """Shape of a single source line."""
    BLANK = "blank"
    COMMENT = "comment"
    TAG_LINE = "tag_line"
    KEYWORD = "keyword"
    STEP = "step"
    DOC_FENCE = "doc_fence"
    TABLE_ROW = "table_row"
    TEXT = "text"


@dataclass(frozen=True)
class Line:
    """A classified source line.

    ``content`` is the entity name for keyword lines, the step text for step
    lines, and the stripped line otherwise (verbatim inside doc strings).
    """

    number: int
    kind: LineKind
    content: str = ""
    keyword: str | None = None
    cells: tuple[str, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    looks_like_keyword: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def split_table_row(row: str, number: int) -> tuple[str, ...]:
    """Split a stripped ``| a | b |`` row into trimmed, unescaped cells."""
    cells: list[str] = []
    buffer: list[str] = []
    chars = iter(row[1:])
    for char in chars:
        if char == "\\":
            escaped = next(chars, "")
            buffer.append(_ESCAPES.get(escaped, "\\" + escaped))
        elif char == "|":
            cells.append("".join(buffer).strip())
            buffer = []
        else:
            buffer.append(char)
    if "".join(buffer).strip():
        raise GherkinSyntaxError(
            GherkinErrorKind.MALFORMED_TABLE, number, "table row must end with '|'"
        )
    return tuple(cells)


def _split_tags(stripped: str, number: int) -> tuple[str, ...]:
    tags: list[str] = []
    for token in stripped.split():
        if token.startswith("#"):
            break
        if not token.startswith("@") or len(token) == 1:
            raise GherkinSyntaxError(
                GherkinErrorKind.SYNTAX_ERROR, number, f"invalid tag {token!r}"
            )
        tags.append(token[1:])
    return tuple(tags)


def _indent_width(raw: str) -> int:
    return len(raw) - len(raw.lstrip())


def classify_line(number: int, raw: str) -> Line:
    """Classify one line outside of a doc string."""
    stripped = raw.strip()
    if not stripped:
        return Line(number, LineKind.BLANK)
    if stripped.startswith("#"):
        return Line(number, LineKind.COMMENT, stripped)
    if stripped == DOC_FENCE:
        return Line(number, LineKind.DOC_FENCE, stripped)
    if stripped.startswith("@"):
        return Line(number, LineKind.TAG_LINE, stripped, tags=_split_tags(stripped, number))
    if stripped.startswith("|"):
        return Line(
            number, LineKind.TABLE_ROW, stripped, cells=split_table_row(stripped, number)
        )
    for keyword in SECTION_KEYWORDS:
        prefix = keyword + ":"
        if stripped.startswith(prefix):
            return Line(
                number, LineKind.KEYWORD, stripped[len(prefix):].strip(), keyword=keyword
            )
    for keyword in STEP_KEYWORDS:
        prefix = keyword + " "
        if stripped.startswith(prefix):
            return Line(
                number, LineKind.STEP, stripped[len(prefix):].strip(), keyword=keyword.lower()
            )
    return Line(
        number,
        LineKind.TEXT,
        stripped,
        looks_like_keyword=_KEYWORD_SHAPE.match(stripped) is not None,
    )


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Lazy, restartable sequence of classified lines.

    Every call to ``iter()`` scans the text again from the first line.
    """

    def __init__(self, text: str) -> None:
        self.text = text

    def __iter__(self) -> Iterator[Line]:
        fence_indent: int | None = None
        for number, raw in enumerate(self.text.splitlines(), start=1):
            if fence_indent is None:
                line = classify_line(number, raw)
                if line.kind is LineKind.DOC_FENCE:
                    fence_indent = _indent_width(raw)
                yield line
            elif raw.strip() == DOC_FENCE:
                fence_indent = None
                yield Line(number, LineKind.DOC_FENCE, DOC_FENCE)
            else:
                captured = raw[min(_indent_width(raw), fence_indent):]
                yield Line(number, LineKind.TEXT, captured.replace('\\"\\"\\"', DOC_FENCE))

    def __repr__(self) -> str:
        return f"Lexer(lines={len(self.text.splitlines())})"
