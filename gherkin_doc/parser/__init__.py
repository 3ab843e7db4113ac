"""Gherkin feature parser.

Parses ``.feature`` text into an immutable document model and back into
plain keyed data.

Usage::

    from gherkin_doc.parser import parse_feature, expand_step

    feature = parse_feature(text)
    print(feature.name, len(feature.scenarios))
    outline = feature.scenarios[0]
    for example in outline.examples:
        print([expand_step(step, example).text for step in outline.steps])
"""

from gherkin_doc.parser.errors import (
    FeatureDecodeError,
    GherkinError,
    GherkinErrorKind,
    GherkinSyntaxError,
)
from gherkin_doc.parser.models import (
    Background,
    Example,
    Feature,
    Scenario,
    ScenarioOutline,
    ScenarioSimple,
    Step,
    StepKeyword,
    Tag,
)
from gherkin_doc.parser.loader import (
    decode_feature_bytes,
    load_feature,
    parse_feature,
    parse_feature_bytes,
    parse_feature_file,
    parse_feature_files,
    save_feature,
)
from gherkin_doc.parser.serialization import (
    decode_scenario,
    feature_from_dict,
    feature_to_dict,
    from_json,
    from_yaml,
    to_json,
    to_yaml,
)
from gherkin_doc.parser.transform import expand_outline, expand_step

__all__ = [
    "parse_feature",
    "parse_feature_bytes",
    "parse_feature_file",
    "parse_feature_files",
    "decode_feature_bytes",
    "save_feature",
    "load_feature",
    "expand_step",
    "expand_outline",
    "feature_to_dict",
    "feature_from_dict",
    "decode_scenario",
    "to_json",
    "from_json",
    "to_yaml",
    "from_yaml",
    "Feature",
    "Background",
    "Scenario",
    "ScenarioSimple",
    "ScenarioOutline",
    "Step",
    "StepKeyword",
    "Example",
    "Tag",
    "GherkinError",
    "GherkinErrorKind",
    "GherkinSyntaxError",
    "FeatureDecodeError",
]
