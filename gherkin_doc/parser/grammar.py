"""Recursive-descent grammar engine for feature documents.

Consumes classified lines with one line of lookahead and builds a parse tree
of plain nodes that still carry their source line numbers. The document
grammar, at line granularity::

    Document    := TagLine* "Feature:" name Description? (TagLine* Background)? Scenario+
    Description := Text+
    Background  := "Background:" name Description? Step*
    Scenario    := TagLine* ("Scenario:" | "Scenario Outline:") name Description? Step* Examples?
    Examples    := "Examples:" Table
    Step        := StepKeyword text (Table | DocString)?
    Table       := TableRow{header} TableRow{data}+
    DocString   := '\"\"\"' Text* '\"\"\"'

Every rule fails with a ``GherkinSyntaxError`` pointing at the line where the
problem was detected.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from .errors import GherkinErrorKind, GherkinSyntaxError
from .lexer import Lexer, Line, LineKind


# ---------------------------------------------------------------------------
# Parse tree
# ---------------------------------------------------------------------------

@dataclass
class TableNode:
    line: int
    header: tuple[str, ...]
    rows: list[tuple[str, ...]] = field(default_factory=list)


@dataclass
class DocStringNode:
    line: int
    text: str


@dataclass
class StepNode:
    line: int
    keyword: str
    text: str
    argument: Union[TableNode, DocStringNode, None] = None


@dataclass
class BackgroundNode:
    line: int
    name: str
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    steps: list[StepNode] = field(default_factory=list)


@dataclass
class ScenarioNode:
    line: int
    name: str
    outline: bool
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    steps: list[StepNode] = field(default_factory=list)
    examples: TableNode | None = None


@dataclass
class FeatureNode:
    line: int
    name: str
    tags: list[str] = field(default_factory=list)
    description: str | None = None
    background: BackgroundNode | None = None
    scenarios: list[ScenarioNode] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Parser state
# ---------------------------------------------------------------------------

class _ParserState:
    """Cursor over the classified lines of one parse call.

    Comment lines are dropped here; blank lines are kept because they end
    descriptions and tables.
    """

    __slots__ = ("_lines", "_peeked", "last_number")

    def __init__(self, lines: Iterable[Line]) -> None:
        self._lines = iter(lines)
        self._peeked: Line | None = None
        self.last_number = 0

    def peek(self) -> Line | None:
        if self._peeked is None:
            for line in self._lines:
                self.last_number = line.number
                if line.kind is not LineKind.COMMENT:
                    self._peeked = line
                    break
        return self._peeked

    def advance(self) -> Line:
        line = self.peek()
        if line is None:
            raise self.end_of_input("no more lines")
        self._peeked = None
        return line

    def peek_significant(self) -> Line | None:
        """Skip blank lines and return the next line, if any."""
        line = self.peek()
        while line is not None and line.kind is LineKind.BLANK:
            self.advance()
            line = self.peek()
        return line

    def end_of_input(self, detail: str) -> GherkinSyntaxError:
        return GherkinSyntaxError(
            GherkinErrorKind.UNEXPECTED_END_OF_INPUT, max(self.last_number, 1), detail
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_SECTION_KEYWORDS = ("Background", "Scenario", "Scenario Outline")


def _is_keyword(line: Line, *keywords: str) -> bool:
    return line.kind is LineKind.KEYWORD and line.keyword in keywords


def _unexpected(line: Line, expected: str) -> GherkinSyntaxError:
    if line.kind is LineKind.TEXT and line.looks_like_keyword:
        keyword = line.content.split(":", 1)[0]
        return GherkinSyntaxError(
            GherkinErrorKind.UNKNOWN_KEYWORD, line.number, f"unknown keyword {keyword!r}"
        )
    found = f"'{line.keyword}:'" if line.kind is LineKind.KEYWORD else line.kind.value
    return GherkinSyntaxError(
        GherkinErrorKind.UNEXPECTED_LINE, line.number, f"expected {expected}, found {found}"
    )


def _malformed(line: int, detail: str) -> GherkinSyntaxError:
    return GherkinSyntaxError(GherkinErrorKind.MALFORMED_TABLE, line, detail)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _parse_tags(state: _ParserState) -> list[str]:
    tags: list[str] = []
    line = state.peek_significant()
    while line is not None and line.kind is LineKind.TAG_LINE:
        tags.extend(state.advance().tags)
        line = state.peek_significant()
    return tags


def _parse_description(state: _ParserState) -> str | None:
    """Fold the text lines directly under a name line into one string."""
    parts: list[str] = []
    line = state.peek()
    while line is not None and line.kind is LineKind.TEXT:
        parts.append(state.advance().content)
        line = state.peek()
    return " ".join(parts) if parts else None


def _parse_table(state: _ParserState) -> TableNode:
    header_line = state.advance()
    header = header_line.cells
    if not header:
        raise _malformed(header_line.number, "table header has no columns")
    if len(set(header)) != len(header):
        raise _malformed(header_line.number, "table header repeats a column name")

    table = TableNode(line=header_line.number, header=header)
    line = state.peek()
    while line is not None and line.kind is LineKind.TABLE_ROW:
        row = state.advance()
        if len(row.cells) != len(header):
            raise _malformed(
                row.number, f"expected {len(header)} cells, found {len(row.cells)}"
            )
        table.rows.append(row.cells)
        line = state.peek()

    if not table.rows:
        if line is None:
            raise state.end_of_input("table needs at least one data row")
        raise _malformed(header_line.number, "table needs at least one data row")
    return table


def _parse_doc_string(state: _ParserState) -> DocStringNode:
    fence = state.advance()
    content: list[str] = []
    while True:
        line = state.peek()
        if line is None:
            raise state.end_of_input(f"doc string opened at line {fence.number} is not closed")
        state.advance()
        if line.kind is LineKind.DOC_FENCE:
            return DocStringNode(line=fence.number, text="\n".join(content))
        content.append(line.content)


def _parse_step(state: _ParserState) -> StepNode:
    line = state.advance()
    step = StepNode(line=line.number, keyword=line.keyword or "", text=line.content)

    following = state.peek()
    if following is None:
        return step
    if following.kind is LineKind.TABLE_ROW:
        step.argument = _parse_table(state)
    elif following.kind is LineKind.DOC_FENCE:
        step.argument = _parse_doc_string(state)
    else:
        return step

    extra = state.peek()
    if extra is not None and extra.kind in (LineKind.TABLE_ROW, LineKind.DOC_FENCE):
        raise GherkinSyntaxError(
            GherkinErrorKind.STEP_ARGUMENT_CONFLICT,
            extra.number,
            f"step on line {step.line} already has an argument",
        )
    return step


def _parse_steps(state: _ParserState) -> list[StepNode]:
    steps: list[StepNode] = []
    line = state.peek_significant()
    while line is not None and line.kind is LineKind.STEP:
        steps.append(_parse_step(state))
        line = state.peek_significant()
    return steps


def _parse_background(state: _ParserState, tags: list[str]) -> BackgroundNode:
    line = state.advance()
    description = _parse_description(state)
    return BackgroundNode(
        line=line.number,
        name=line.content,
        tags=tags,
        description=description,
        steps=_parse_steps(state),
    )


def _parse_scenario(state: _ParserState, tags: list[str]) -> ScenarioNode:
    line = state.advance()
    scenario = ScenarioNode(
        line=line.number,
        name=line.content,
        outline=line.keyword == "Scenario Outline",
        tags=tags,
    )
    scenario.description = _parse_description(state)
    scenario.steps = _parse_steps(state)

    following = state.peek_significant()
    if scenario.outline and following is not None and following.kind is LineKind.TAG_LINE:
        # Without its table the outline is already invalid, so these tags can
        # be consumed to find out what they precede.
        tag_line = following
        _parse_tags(state)
        following = state.peek_significant()
        if following is not None and _is_keyword(following, "Examples"):
            raise _unexpected(tag_line, "a step or 'Examples:'")
    if (
        scenario.outline
        and following is not None
        and not _is_keyword(following, "Examples", *_SECTION_KEYWORDS)
    ):
        raise _unexpected(following, "a step or 'Examples:'")

    if following is not None and _is_keyword(following, "Examples"):
        if not scenario.outline:
            raise GherkinSyntaxError(
                GherkinErrorKind.UNEXPECTED_LINE,
                following.number,
                "'Examples:' is only allowed under 'Scenario Outline:'",
            )
        state.advance()
        table_line = state.peek_significant()
        if table_line is None:
            raise state.end_of_input("'Examples:' needs a table")
        if table_line.kind is not LineKind.TABLE_ROW:
            raise _unexpected(table_line, "an examples table")
        scenario.examples = _parse_table(state)

    if scenario.outline and scenario.examples is None:
        raise GherkinSyntaxError(
            GherkinErrorKind.MISSING_EXAMPLES,
            scenario.line,
            f"scenario outline {scenario.name!r} has no 'Examples:' table",
        )
    return scenario


def _parse_body(
    state: _ParserState, tags: list[str]
) -> tuple[BackgroundNode | None, list[ScenarioNode]]:
    """Parse the optional background and the scenarios that follow it.

    *tags* are tag lines already consumed in front of the first section.
    """
    background: BackgroundNode | None = None
    scenarios: list[ScenarioNode] = []
    while True:
        tags = tags + _parse_tags(state)
        line = state.peek_significant()
        if line is None:
            if tags:
                raise state.end_of_input("tags must be followed by a scenario or background")
            break
        if _is_keyword(line, "Background") and background is None and not scenarios:
            background = _parse_background(state, tags)
        elif _is_keyword(line, "Scenario", "Scenario Outline"):
            scenarios.append(_parse_scenario(state, tags))
        elif scenarios or background is not None:
            raise _unexpected(line, "a step, tag line or scenario")
        else:
            raise _unexpected(line, "a background, tag line or scenario")
        tags = []

    if not scenarios:
        raise state.end_of_input("a feature needs at least one scenario")
    return background, scenarios


def _parse_document(state: _ParserState) -> FeatureNode:
    tags = _parse_tags(state)
    line = state.peek_significant()
    if line is None:
        raise state.end_of_input("expected 'Feature:'")

    if not _is_keyword(line, "Feature"):
        if _is_keyword(line, "Background", "Scenario", "Scenario Outline"):
            # Report problems inside the sections before the missing header.
            _parse_body(state, tags)
        raise _unexpected(line, "'Feature:'")

    state.advance()
    feature = FeatureNode(line=line.number, name=line.content, tags=tags)
    feature.description = _parse_description(state)
    feature.background, feature.scenarios = _parse_body(state, [])
    return feature


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_tree(text: str) -> FeatureNode:
    """Parse feature text into a parse tree.

    Raises:
        GherkinSyntaxError: If the text does not follow the document grammar.
    """
    return _parse_document(_ParserState(Lexer(text)))
