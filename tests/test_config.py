"""Tests for VisualizerConfig."""

import pytest

from config import VisualizerConfig
from structures.errors import InvalidInputError


class TestVisualizerConfig:

    def test_defaults(self):
        cfg = VisualizerConfig.from_env({})
        assert cfg.log_level == "INFO"
        assert cfg.default_speed == "medium"
        assert cfg.max_array_length == 50
        assert cfg.secret_key

    def test_defaults_are_not_shared_between_instances(self):
        a, b = VisualizerConfig(), VisualizerConfig()
        a.default_array.append(1)
        assert b.default_array == VisualizerConfig.default_array

    def test_environment_overrides(self):
        cfg = VisualizerConfig.from_env({
            "VISUALIZER_LOG_LEVEL": "debug",
            "VISUALIZER_DEFAULT_SPEED": "FAST",
            "VISUALIZER_MAX_ARRAY": "10",
            "VISUALIZER_MAX_VERTICES": "8",
            "VISUALIZER_SECRET_KEY": "s3cret",
        })
        assert cfg.log_level == "DEBUG"
        assert cfg.default_speed == "fast"
        assert cfg.max_array_length == 10
        assert cfg.max_vertices == 8
        assert cfg.secret_key == "s3cret"

    @pytest.mark.parametrize("raw", ["ten", "0", "-4"])
    def test_bad_integer(self, raw):
        with pytest.raises(InvalidInputError):
            VisualizerConfig.from_env({"VISUALIZER_MAX_ARRAY": raw})

    def test_unknown_option(self):
        with pytest.raises(InvalidInputError):
            VisualizerConfig(colour="blue")

    def test_speed_from_environment_is_validated(self):
        with pytest.raises(InvalidInputError, match="DEFAULT_SPEED"):
            VisualizerConfig.from_env({"VISUALIZER_DEFAULT_SPEED": "warp"})
