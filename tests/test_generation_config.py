"""
Tests for GenerationConfig validation and JSON loading.
"""

import json
import logging

import pytest

from cavegen.level.generation_config import GenerationConfig, load_generation_config
from cavegen.level.noise_field import Interpolation


class TestDefaults:
    def test_default_values(self):
        config = GenerationConfig()
        assert (config.height, config.width) == (100, 100)
        assert config.alive_probability == 0.39
        assert config.birth_limit == 3
        assert config.starvation_limit == 4
        assert config.simulation_steps == 5
        assert config.validity_threshold == 0.65
        assert config.min_spawn_exit_distance == 60
        assert config.octave_count == 5
        assert config.interpolation_kind is Interpolation.LINEAR
        assert config.spike_ratio == 0.25
        assert config.turret_ratio == 0.125
        assert config.seed is None
        config.validate()


class TestValidation:
    @pytest.mark.parametrize("overrides", [
        {"height": 0},
        {"width": -5},
        {"alive_probability": 1.2},
        {"alive_probability": -0.1},
        {"validity_threshold": 0.0},
        {"validity_threshold": 1.5},
        {"octave_count": 0},
        {"max_attempts": 0},
        {"simulation_steps": -1},
        {"threshold_relaxation": -0.1},
        {"min_validity_threshold": 0.9},
        {"interpolation": "cubic"},
        {"spike_ratio": 1.5},
        {"turret_ratio": -0.25},
    ])
    def test_invalid_values(self, overrides):
        with pytest.raises(ValueError):
            GenerationConfig(**overrides).validate()


class TestJsonLoading:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_generation_config(str(tmp_path / "absent.json"))
        assert config == GenerationConfig()

    def test_save_and_load(self, tmp_path):
        path = str(tmp_path / "nested" / "generation.json")
        saved = GenerationConfig(height=20, width=30, interpolation="cosine", seed=5)
        saved.save_to_json(path)
        assert load_generation_config(path) == saved

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        path = tmp_path / "generation.json"
        path.write_text(json.dumps({"height": 12, "tile_size": 24}))
        with caplog.at_level(logging.WARNING):
            config = load_generation_config(str(path))
        assert config.height == 12
        assert "tile_size" in caplog.text

    def test_invalid_values_in_file(self, tmp_path):
        path = tmp_path / "generation.json"
        path.write_text(json.dumps({"octave_count": 0}))
        with pytest.raises(ValueError):
            load_generation_config(str(path))

    def test_non_object_rejected(self, tmp_path):
        path = tmp_path / "generation.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError):
            load_generation_config(str(path))
