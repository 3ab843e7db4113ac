"""gherkin-doc configuration.

Settings for the boundary layer that turns files and byte buffers into text
before parsing. Uses a Pydantic v2 model so values are validated at
construction time and can be serialised to/from JSON or read from the
environment.
"""

from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes", "on"}


class ParserConfig(BaseModel):
    """Options for loading feature documents.

    The grammar itself takes no options; these only affect how bytes and
    files reach it.
    """

    encoding: str = Field(
        default="utf-8-sig", description="Codec used to decode feature bytes"
    )
    feature_suffixes: list[str] = Field(
        default=[".feature"], description="File suffixes accepted by the file loader"
    )
    verbose: bool = Field(
        default=False, description="Print a status line for every parsed file"
    )

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {value}") from exc
        return value

    @field_validator("feature_suffixes")
    @classmethod
    def _normalise_suffixes(cls, value: list[str]) -> list[str]:
        return [s.lower() if s.startswith(".") else f".{s.lower()}" for s in value if s]

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ParserConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Build a ``ParserConfig`` from environment variables.

        Recognised variables (all optional):
            GHERKIN_ENCODING, GHERKIN_SUFFIXES (comma-separated),
            GHERKIN_VERBOSE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GHERKIN_ENCODING"):
            kwargs["encoding"] = os.environ["GHERKIN_ENCODING"]
        if os.environ.get("GHERKIN_SUFFIXES"):
            kwargs["feature_suffixes"] = [
                s.strip() for s in os.environ["GHERKIN_SUFFIXES"].split(",") if s.strip()
            ]
        if os.environ.get("GHERKIN_VERBOSE"):
            kwargs["verbose"] = os.environ["GHERKIN_VERBOSE"].strip().lower() in _TRUTHY
        return cls(**kwargs)
