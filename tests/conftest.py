"""Shared pytest fixtures for the gherkin-doc test suite.

Provides reusable fixtures for:
- Small inline feature documents
- The full sample feature file under ``tests/fixtures``
- Temporary feature files on disk
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Inline documents
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_feature_text() -> str:
    """One plain scenario with two steps."""
    return textwrap.dedent("""\
        Feature: Minimal Scenario Outline

        Scenario: minimalistic
        Given I am a mountain
        And I love chocolate
    """)


@pytest.fixture
def outline_feature_text() -> str:
    """A scenario outline with a two-column Examples table."""
    return textwrap.dedent("""\
        Feature: Minimal Scenario Outline

        Scenario Outline: minimalistic
        Given I am a <mountain>
        And I love <chocolate>

        Examples:
        | mountain | chocolate |
        | etna | cadburys |
        | peak | galaxy |
    """)


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_feature_path() -> Path:
    """Path to the sample feature file fixture."""
    path = FIXTURES_DIR / "shopping.feature"
    assert path.exists(), f"Sample feature fixture not found at {path}"
    return path


@pytest.fixture
def sample_feature_text(sample_feature_path: Path) -> str:
    """Raw text of the sample feature file."""
    return sample_feature_path.read_text(encoding="utf-8")


@pytest.fixture
def write_feature(tmp_path: Path):
    """Factory writing feature text to a temporary file and returning its path."""

    def _write(text: str, name: str = "example.feature", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode(encoding))
        return path

    return _write
