"""Turn a parse tree into the immutable document model.

Scenario outlines keep their placeholder step text; each data row of the
Examples table becomes one ``Example``. Concrete steps are produced on demand
with ``expand_step`` / ``expand_outline``.
"""

from __future__ import annotations

from typing import Union

from .errors import GherkinErrorKind, GherkinSyntaxError
from .grammar import (
    BackgroundNode,
    DocStringNode,
    FeatureNode,
    ScenarioNode,
    StepNode,
    TableNode,
)
from .models import (
    Background,
    Example,
    Feature,
    ScenarioOutline,
    ScenarioSimple,
    Step,
    StepKeyword,
    Tag,
)


# ---------------------------------------------------------------------------
# Node conversion
# ---------------------------------------------------------------------------

def _table_rows(table: TableNode) -> list[dict[str, str]]:
    """Key every data row by the header row, preserving row order."""
    return [dict(zip(table.header, row)) for row in table.rows]


def _tags(names: list[str]) -> list[Tag]:
    return [Tag(name=name) for name in names]


def _build_step(node: StepNode) -> Step:
    table = None
    doc_string = None
    if isinstance(node.argument, TableNode):
        table = _table_rows(node.argument)
    elif isinstance(node.argument, DocStringNode):
        doc_string = node.argument.text
    return Step(
        keyword=StepKeyword(node.keyword),
        text=node.text,
        table=table,
        doc_string=doc_string,
    )


def _build_background(node: BackgroundNode) -> Background:
    return Background(
        name=node.name,
        tags=_tags(node.tags),
        description=node.description,
        steps=[_build_step(step) for step in node.steps],
    )


def _build_scenario(node: ScenarioNode) -> Union[ScenarioSimple, ScenarioOutline]:
    steps = [_build_step(step) for step in node.steps]
    if not node.outline:
        return ScenarioSimple(
            name=node.name,
            description=node.description,
            tags=_tags(node.tags),
            steps=steps,
        )
    if node.examples is None:
        raise GherkinSyntaxError(
            GherkinErrorKind.MISSING_EXAMPLES,
            node.line,
            f"scenario outline {node.name!r} has no 'Examples:' table",
        )
    return ScenarioOutline(
        name=node.name,
        description=node.description,
        tags=_tags(node.tags),
        steps=steps,
        examples=[Example(values=values) for values in _table_rows(node.examples)],
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_feature(tree: FeatureNode) -> Feature:
    """Materialise a ``Feature`` from a parse tree."""
    return Feature(
        name=tree.name,
        description=tree.description,
        tags=_tags(tree.tags),
        background=_build_background(tree.background) if tree.background else None,
        scenarios=[_build_scenario(node) for node in tree.scenarios],
    )


def expand_step(step: Step, example: Example) -> Step:
    """Substitute ``<key>`` placeholders in the step text from one example.

    Placeholders with no matching key are left verbatim; table and doc string
    arguments are not substituted.
    """
    return step.substitute(example)


def expand_outline(outline: ScenarioOutline) -> list[ScenarioSimple]:
    """One concrete scenario per example row, in table order."""
    return outline.expand()
