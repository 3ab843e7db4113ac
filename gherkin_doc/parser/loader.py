"""Entry points that turn text, bytes, or files into a ``Feature``.

``parse_feature`` is the pure core call. The byte and file variants are thin
wrappers that decode first, so callers can tell "not valid text" apart from
"not valid Gherkin".
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path

from gherkin_doc.config import ParserConfig
from gherkin_doc.utils import (
    load_json,
    load_yaml,
    print_error,
    print_feature_summary,
    print_status,
    save_json,
    save_yaml,
)

from .errors import FeatureDecodeError, GherkinError
from .grammar import parse_tree
from .models import Feature
from .serialization import feature_from_dict, feature_to_dict
from .transform import build_feature

_YAML_SUFFIXES = (".yaml", ".yml")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_feature(text: str) -> Feature:
    """Parse feature text into a ``Feature``.

    The call is pure and keeps no state between invocations, so it is safe to
    run concurrently from several threads.

    Raises:
        GherkinSyntaxError: If the text is not a valid feature document.
    """
    return build_feature(parse_tree(text))


def decode_feature_bytes(data: bytes, encoding: str = "utf-8-sig") -> str:
    """Decode raw feature bytes to text.

    Raises:
        FeatureDecodeError: If *data* is not valid in *encoding*.
    """
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FeatureDecodeError(encoding, exc.start, exc.reason) from exc


def parse_feature_bytes(data: bytes, config: ParserConfig | None = None) -> Feature:
    """Decode *data* with the configured encoding and parse it."""
    config = config or ParserConfig()
    return parse_feature(decode_feature_bytes(data, config.encoding))


async def _read_feature_file(path: str | Path, config: ParserConfig) -> bytes:
    """Read a feature file in a worker thread after checking its suffix."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Feature file not found: {path}")
    if file_path.suffix.lower() not in config.feature_suffixes:
        raise ValueError(
            f"Expected one of {', '.join(config.feature_suffixes)}, got: {file_path.suffix or '(none)'}"
        )
    return await asyncio.to_thread(file_path.read_bytes)


async def parse_feature_file(
    path: str | Path, config: ParserConfig | None = None
) -> Feature:
    """Read and parse a single feature file.

    In verbose mode a status line and a summary table are printed for each
    parsed file, and decode or grammar errors are echoed before they propagate.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the suffix is not an accepted feature suffix.
        FeatureDecodeError: If the bytes cannot be decoded.
        GherkinSyntaxError: If the text is not a valid feature document.
    """
    config = config or ParserConfig()
    data = await _read_feature_file(path, config)
    try:
        feature = parse_feature_bytes(data, config)
    except GherkinError as exc:
        if config.verbose:
            print_error(f"{path}: {exc}")
        raise
    if config.verbose:
        print_status(
            f"Parsed {path}: {feature.name!r} ({len(feature.scenarios)} scenarios)"
        )
        print_feature_summary(feature, title=str(path))
    return feature


async def parse_feature_files(
    paths: Iterable[str | Path], config: ParserConfig | None = None
) -> list[Feature]:
    """Parse several feature files concurrently, returning them in input order.

    The first failure propagates to the caller.
    """
    config = config or ParserConfig()
    return list(
        await asyncio.gather(*(parse_feature_file(path, config) for path in paths))
    )


# ---------------------------------------------------------------------------
# Serialised features on disk
# ---------------------------------------------------------------------------

async def save_feature(feature: Feature, path: str | Path) -> None:
    """Write a feature as JSON, or as YAML for ``.yaml`` / ``.yml`` paths."""
    data = feature_to_dict(feature)
    if Path(path).suffix.lower() in _YAML_SUFFIXES:
        await save_yaml(data, path)
    else:
        await save_json(data, path)


async def load_feature(path: str | Path) -> Feature:
    """Read a feature written by ``save_feature``; the read runs in a worker thread."""
    if Path(path).suffix.lower() in _YAML_SUFFIXES:
        data = await asyncio.to_thread(load_yaml, path)
    else:
        data = await asyncio.to_thread(load_json, path)
    return feature_from_dict(data)
