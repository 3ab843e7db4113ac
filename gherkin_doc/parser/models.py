"""Pydantic v2 models for parsed Gherkin feature documents.

Defines the immutable document model produced by the parser: a Feature with
its optional Background, an ordered list of scenarios (plain or outline),
their steps, tags, and outline examples.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class StepKeyword(str, Enum):
    """Role keyword that opens a step line."""
    GIVEN = "given"
    WHEN = "when"
    THEN = "then"
    AND = "and"
    BUT = "but"


class _DocumentModel(BaseModel):
    """Base for every document node: immutable, unknown keys rejected."""

    model_config = ConfigDict(frozen=True, extra="forbid")


# ---------------------------------------------------------------------------
# Leaf Models
# ---------------------------------------------------------------------------

class Tag(_DocumentModel):
    """A free-form label attached to a feature, background or scenario."""
    name: str = Field(..., description="Tag name without the leading '@'")


class Example(_DocumentModel):
    """One data row of an outline's Examples table."""
    values: dict[str, str] = Field(
        default_factory=dict, description="Header column name -> cell value"
    )


class Step(_DocumentModel):
    """A single step, e.g. 'Given I am on the homepage'."""
    keyword: StepKeyword = Field(..., description="Role keyword of the step")
    text: str = Field(..., description="Step text after the keyword")
    table: Optional[list[dict[str, str]]] = Field(
        default=None, description="Data rows keyed by the table's header row"
    )
    doc_string: Optional[str] = Field(
        default=None, description="Multi-line text argument"
    )

    @model_validator(mode="after")
    def _single_argument(self) -> "Step":
        if self.table is not None and self.doc_string is not None:
            raise ValueError("a step carries either a table or a doc string, not both")
        return self

    @property
    def argument(self) -> list[dict[str, str]] | str | None:
        """The step argument, whichever kind is present."""
        return self.table if self.table is not None else self.doc_string

    def substitute(self, example: Example) -> "Step":
        """Return a copy with every ``<key>`` in ``text`` replaced from *example*.

        Placeholders without a matching key are left as they are, and the
        table / doc string argument is never touched.
        """
        text = self.text
        for key, value in example.values.items():
            text = text.replace(f"<{key}>", value)
        return self.model_copy(update={"text": text})


# ---------------------------------------------------------------------------
# Scenario Models
# ---------------------------------------------------------------------------

class Background(_DocumentModel):
    """Steps implicitly run before every scenario of a feature."""
    name: str = Field(default="", description="Text after 'Background:'")
    tags: list[Tag] = Field(default_factory=list)
    description: Optional[str] = Field(default=None)
    steps: list[Step] = Field(default_factory=list)


class ScenarioSimple(_DocumentModel):
    """A ``Scenario:`` block; never has examples."""
    name: str = Field(..., description="Text after 'Scenario:'")
    description: Optional[str] = Field(default=None)
    tags: list[Tag] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)

    @property
    def kind(self) -> str:
        return "simple"


class ScenarioOutline(_DocumentModel):
    """A ``Scenario Outline:`` block with at least one example."""
    name: str = Field(..., description="Text after 'Scenario Outline:'")
    description: Optional[str] = Field(default=None)
    tags: list[Tag] = Field(default_factory=list)
    steps: list[Step] = Field(default_factory=list)
    examples: list[Example] = Field(..., min_length=1)

    @property
    def kind(self) -> str:
        return "outline"

    def expand(self) -> list[ScenarioSimple]:
        """Materialise one concrete scenario per example row."""
        return [
            ScenarioSimple(
                name=self.name,
                description=self.description,
                tags=list(self.tags),
                steps=[step.substitute(example) for step in self.steps],
            )
            for example in self.examples
        ]


# Decoding tries the simple shape first, then falls back to the outline.
Scenario = Annotated[
    Union[ScenarioSimple, ScenarioOutline], Field(union_mode="left_to_right")
]


# ---------------------------------------------------------------------------
# Top-Level Feature
# ---------------------------------------------------------------------------

class Feature(_DocumentModel):
    """A single parsed Gherkin feature file."""
    name: str = Field(..., description="Text after 'Feature:'")
    description: Optional[str] = Field(
        default=None, description="Free text folded from the lines after the name"
    )
    tags: list[Tag] = Field(default_factory=list)
    background: Optional[Background] = Field(default=None)
    scenarios: list[Scenario] = Field(
        default_factory=list, description="Scenarios in document order"
    )

    @property
    def scenario_count(self) -> int:
        return len(self.scenarios)

    def find_scenario(self, name: str) -> ScenarioSimple | ScenarioOutline | None:
        """Return the first scenario called *name*, or ``None``."""
        for scenario in self.scenarios:
            if scenario.name == name:
                return scenario
        return None
