"""gherkin-doc: parse Gherkin ``.feature`` files into a typed document model."""

from gherkin_doc.config import ParserConfig
from gherkin_doc.parser import (
    Feature,
    FeatureDecodeError,
    GherkinErrorKind,
    GherkinSyntaxError,
    expand_step,
    parse_feature,
    parse_feature_bytes,
    parse_feature_file,
)

__version__ = "0.1.0"

__all__ = [
    "ParserConfig",
    "parse_feature",
    "parse_feature_bytes",
    "parse_feature_file",
    "expand_step",
    "Feature",
    "GherkinErrorKind",
    "GherkinSyntaxError",
    "FeatureDecodeError",
]
