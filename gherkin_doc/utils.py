"""Shared utility functions for gherkin-doc.

Provides the Rich console used for diagnostics, small formatting helpers, and
JSON/YAML file I/O for serialised features. Nothing here is used by the core
``parse_feature`` call, which never prints.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from gherkin_doc.parser.models import Feature

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_status(message: str) -> None:
    """Print a dim progress line."""
    console.print(f"[dim]{message}[/dim]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def feature_summary(feature: Feature) -> dict[str, str]:
    """Key facts about a parsed feature, as display strings."""
    outlines = [s for s in feature.scenarios if s.kind == "outline"]
    return {
        "Feature": feature.name,
        "Background": "yes" if feature.background else "no",
        "Scenarios": str(len(feature.scenarios)),
        "Outlines": str(len(outlines)),
        "Examples": str(sum(len(s.examples) for s in outlines)),
        "Steps": str(sum(len(s.steps) for s in feature.scenarios)),
        "Tags": ", ".join(f"@{t.name}" for t in feature.tags) or "-",
    }


def print_feature_summary(feature: Feature, title: str = "Feature") -> None:
    """Print a two-column summary table of a parsed feature."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in feature_summary(feature).items():
        table.add_row(key, value)

    console.print(table)


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file that holds a top-level object.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the top-level value is not an object.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {path}")
    return data


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file that holds a top-level mapping."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping in {path}")
    return data


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically and the write runs in a
    worker thread.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


async def save_yaml(data: dict[str, Any], path: str | Path) -> None:
    """Save data as block-style YAML, keeping key order."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")
