"""Unit tests for ParserConfig (gherkin_doc.config).

Tests cover:
- Defaults
- Encoding and suffix validation
- save/load round trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from gherkin_doc.config import ParserConfig


class TestParserConfig:
    @pytest.mark.unit
    def test_defaults(self):
        config = ParserConfig()
        assert config.encoding == "utf-8-sig"
        assert config.feature_suffixes == [".feature"]
        assert config.verbose is False

    @pytest.mark.unit
    def test_unknown_encoding_rejected(self):
        with pytest.raises(ValidationError):
            ParserConfig(encoding="no-such-codec")

    @pytest.mark.unit
    def test_suffixes_normalised(self):
        config = ParserConfig(feature_suffixes=["FEATURE", ".Story", ""])
        assert config.feature_suffixes == [".feature", ".story"]

    @pytest.mark.unit
    def test_save_and_load(self, tmp_path: Path):
        config = ParserConfig(encoding="latin-1", verbose=True)
        target = config.save(tmp_path / "nested" / "config.json")
        assert target.exists()
        assert ParserConfig.load(target) == config


class TestFromEnv:
    @pytest.mark.unit
    def test_empty_environment_gives_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            assert ParserConfig.from_env() == ParserConfig()

    @pytest.mark.unit
    def test_reads_variables(self):
        env = {
            "GHERKIN_ENCODING": "utf-16",
            "GHERKIN_SUFFIXES": ".feature, story",
            "GHERKIN_VERBOSE": "yes",
        }
        with patch.dict(os.environ, env, clear=True):
            config = ParserConfig.from_env()
        assert config.encoding == "utf-16"
        assert config.feature_suffixes == [".feature", ".story"]
        assert config.verbose is True

    @pytest.mark.unit
    def test_falsy_verbose(self):
        with patch.dict(os.environ, {"GHERKIN_VERBOSE": "0"}, clear=True):
            assert ParserConfig.from_env().verbose is False
