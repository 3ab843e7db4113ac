"""Structural encode/decode of the document model.

Features map 1:1 onto plain keyed data (dicts of lists and strings), which is
then rendered as JSON or YAML. A scenario is stored without a discriminator:
decoding tries the simple shape first and falls back to the outline shape.
"""

from __future__ import annotations

from typing import Any, Union

import yaml
from pydantic import TypeAdapter, ValidationError

from .models import Feature, Scenario, ScenarioOutline, ScenarioSimple

_SCENARIO_ADAPTER: TypeAdapter[Union[ScenarioSimple, ScenarioOutline]] = TypeAdapter(Scenario)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------

def scenario_to_dict(scenario: Union[ScenarioSimple, ScenarioOutline]) -> dict[str, Any]:
    """Encode a single scenario of either kind."""
    return _SCENARIO_ADAPTER.dump_python(scenario, mode="json")


def decode_scenario(data: dict[str, Any]) -> Union[ScenarioSimple, ScenarioOutline]:
    """Decode a scenario, trying ``ScenarioSimple`` before ``ScenarioOutline``.

    Raises:
        ValidationError: If the data fits neither shape.
    """
    try:
        return ScenarioSimple.model_validate(data)
    except ValidationError:
        return ScenarioOutline.model_validate(data)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

def feature_to_dict(feature: Feature) -> dict[str, Any]:
    """Encode a feature as JSON-compatible keyed data."""
    return feature.model_dump(mode="json")


def feature_from_dict(data: dict[str, Any]) -> Feature:
    """Decode keyed data produced by ``feature_to_dict``."""
    return Feature.model_validate(data)


def to_json(feature: Feature, indent: int = 2) -> str:
    return feature.model_dump_json(indent=indent)


def from_json(raw: str | bytes) -> Feature:
    return Feature.model_validate_json(raw)


def to_yaml(feature: Feature) -> str:
    return yaml.safe_dump(feature_to_dict(feature), sort_keys=False, allow_unicode=True)


def from_yaml(raw: str) -> Feature:
    """Decode a feature from YAML text.

    Raises:
        yaml.YAMLError: If the text is not valid YAML.
        ValueError: If the document is not a mapping.
        ValidationError: If the mapping is not a valid feature.
    """
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return feature_from_dict(data)
