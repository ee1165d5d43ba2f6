"""Tests for generation config loading."""

import json

import pytest

from schedule_planner.exceptions import CatalogError, InvalidInputError
from schedule_planner.generator.config import GenerationConfig, load_generation_config
from schedule_planner.generator.constants import DEFAULT_MAX_RESULTS
from schedule_planner.models import ActivityType


class TestGenerationConfig:
    """Tests for GenerationConfig."""

    def test_defaults(self):
        config = load_generation_config(None)
        assert config.max_results == DEFAULT_MAX_RESULTS
        assert config.section_filter == {}
        assert not config.override_policy
        assert not config.strict

    def test_from_dict(self):
        config = GenerationConfig.from_dict(
            {
                "max_results": "25",
                "strict": True,
                "filters": {"mat1620": ["MAT1620-1"]},
                "overrides": {"MAT1620:tutorial": True},
            }
        )
        assert config.max_results == 25
        assert config.strict
        assert config.section_filter == {"MAT1620": ["MAT1620-1"]}
        assert config.override_policy.allows("MAT1620", ActivityType.TUTORIAL)

    def test_bad_max_results(self):
        with pytest.raises(InvalidInputError, match="max_results"):
            GenerationConfig.from_dict({"max_results": "many"})

    def test_bad_filters(self):
        with pytest.raises(InvalidInputError, match="filters"):
            GenerationConfig.from_dict({"filters": ["MAT1620-1"]})

    def test_to_dict_round_trip(self):
        data = {
            "max_results": 10,
            "strict": False,
            "filters": {"MAT1620": ["MAT1620-2"]},
            "overrides": {"IIC2233:lab": True},
        }
        assert GenerationConfig.from_dict(data).to_dict() == data


class TestLoadGenerationConfig:
    """Tests for load_generation_config."""

    def test_load_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_results": 3}), encoding="utf-8")
        assert load_generation_config(path).max_results == 3

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError):
            load_generation_config(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(CatalogError, match="JSON object"):
            load_generation_config(path)
