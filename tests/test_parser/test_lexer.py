"""Tests for the line classifier (lexer module).

Covers:
- Keyword, step, tag, table, fence, comment, blank and text lines
- Indentation and whitespace trimming
- Table cell splitting and escapes
- Raw capture between doc-string fences
- Restartable iteration
"""

from __future__ import annotations

import textwrap

import pytest

from gherkin_doc.parser.errors import GherkinErrorKind, GherkinSyntaxError
from gherkin_doc.parser.lexer import Lexer, LineKind, classify_line, split_table_row


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# classify_line
# ---------------------------------------------------------------------------


class TestClassifyLine:
    def test_blank_line(self):
        assert classify_line(1, "   \t ").kind is LineKind.BLANK

    def test_comment_ignores_leading_whitespace(self):
        line = classify_line(3, "    # a note")
        assert line.kind is LineKind.COMMENT
        assert line.number == 3

    @pytest.mark.parametrize(
        "raw, keyword, name",
        [
            ("Feature: Shopping cart", "Feature", "Shopping cart"),
            ("  Background:", "Background", ""),
            ("Scenario:   minimalistic  ", "Scenario", "minimalistic"),
            ("Scenario Outline: with data", "Scenario Outline", "with data"),
            ("\tExamples:", "Examples", ""),
        ],
    )
    def test_section_keywords(self, raw, keyword, name):
        line = classify_line(1, raw)
        assert line.kind is LineKind.KEYWORD
        assert line.keyword == keyword
        assert line.content == name

    def test_keywords_are_case_sensitive(self):
        line = classify_line(1, "feature: lower case")
        assert line.kind is LineKind.TEXT

    @pytest.mark.parametrize("word", ["Given", "When", "Then", "And", "But"])
    def test_step_keywords(self, word):
        line = classify_line(7, f"    {word} I am a mountain  ")
        assert line.kind is LineKind.STEP
        assert line.keyword == word.lower()
        assert line.content == "I am a mountain"

    def test_step_keyword_needs_a_space(self):
        assert classify_line(1, "Givenness is a word").kind is LineKind.TEXT

    def test_doc_fence(self):
        assert classify_line(1, '   """').kind is LineKind.DOC_FENCE

    def test_fence_with_trailing_text_is_not_a_fence(self):
        assert classify_line(1, '"""json').kind is LineKind.TEXT

    def test_tag_line(self):
        line = classify_line(2, "  @smoke @web   @smoke")
        assert line.kind is LineKind.TAG_LINE
        assert line.tags == ("smoke", "web", "smoke")

    def test_tag_line_with_trailing_comment(self):
        line = classify_line(2, "@wip # not finished")
        assert line.tags == ("wip",)

    def test_invalid_tag_token(self):
        with pytest.raises(GherkinSyntaxError) as exc_info:
            classify_line(4, "@good bad")
        assert exc_info.value.kind is GherkinErrorKind.SYNTAX_ERROR
        assert exc_info.value.line == 4

    def test_table_row(self):
        line = classify_line(5, "  | mountain | chocolate |")
        assert line.kind is LineKind.TABLE_ROW
        assert line.cells == ("mountain", "chocolate")

    def test_plain_text(self):
        line = classify_line(2, "  This is a description of the feature  ")
        assert line.kind is LineKind.TEXT
        assert line.content == "This is a description of the feature"
        assert line.looks_like_keyword is False

    def test_keyword_shaped_text_is_flagged(self):
        line = classify_line(2, "Rule: only one discount")
        assert line.kind is LineKind.TEXT
        assert line.looks_like_keyword is True


# ---------------------------------------------------------------------------
# split_table_row
# ---------------------------------------------------------------------------


class TestSplitTableRow:
    def test_cells_are_trimmed(self):
        assert split_table_row("|  a |b  |   c|", 1) == ("a", "b", "c")

    def test_empty_cells_are_kept(self):
        assert split_table_row("| a || c |", 1) == ("a", "", "c")

    def test_escapes(self):
        assert split_table_row(r"| a \| b | c\nd | e\\f |", 1) == ("a | b", "c\nd", "e\\f")

    def test_unknown_escape_is_kept(self):
        assert split_table_row(r"| \t |", 1) == ("\\t",)

    def test_missing_closing_pipe(self):
        with pytest.raises(GherkinSyntaxError) as exc_info:
            split_table_row("| a | b", 9)
        assert exc_info.value.kind is GherkinErrorKind.MALFORMED_TABLE
        assert exc_info.value.line == 9


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------


class TestLexer:
    def test_line_numbers_are_one_based(self):
        lines = list(Lexer("Feature: F\n\nScenario: s\n"))
        assert [line.number for line in lines] == [1, 2, 3]
        assert [line.kind for line in lines] == [
            LineKind.KEYWORD,
            LineKind.BLANK,
            LineKind.KEYWORD,
        ]

    def test_windows_line_endings(self):
        lines = list(Lexer("Feature: F\r\nScenario: s\r\n"))
        assert [line.content for line in lines] == ["F", "s"]

    def test_restartable(self):
        lexer = Lexer("Feature: F\n# note\nScenario: s\nGiven a\n")
        assert list(lexer) == list(lexer)

    def test_doc_string_is_captured_verbatim(self):
        text = textwrap.dedent('''\
            Given a receipt
              """
              Scenario: not a keyword here
              | not | a table |

              # not a comment
                indented
              """
            Then done
        ''')
        lines = list(Lexer(text))
        kinds = [line.kind for line in lines]
        assert kinds == [
            LineKind.STEP,
            LineKind.DOC_FENCE,
            LineKind.TEXT,
            LineKind.TEXT,
            LineKind.TEXT,
            LineKind.TEXT,
            LineKind.TEXT,
            LineKind.DOC_FENCE,
            LineKind.STEP,
        ]
        captured = [line.content for line in lines[2:7]]
        assert captured == [
            "Scenario: not a keyword here",
            "| not | a table |",
            "",
            "# not a comment",
            "  indented",
        ]

    def test_escaped_fence_inside_doc_string(self):
        lines = list(Lexer('"""\nsay \\"\\"\\"hi\\"\\"\\"\n"""\n'))
        assert lines[1].content == 'say """hi"""'

    def test_malformed_row_is_reported_lazily(self):
        lexer = Lexer("Feature: F\n| a | b\n")
        iterator = iter(lexer)
        assert next(iterator).kind is LineKind.KEYWORD
        with pytest.raises(GherkinSyntaxError) as exc_info:
            next(iterator)
        assert exc_info.value.line == 2
