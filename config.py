"""
config.py — Application Configuration
=======================================
Class-level defaults, overridable from VISUALIZER_* environment variables:

    VISUALIZER_LOG_LEVEL       DEBUG / INFO / WARNING …
    VISUALIZER_DEFAULT_SPEED   one of engine.stepper.SPEED_PRESETS
    VISUALIZER_MAX_ARRAY       largest array a sort request may carry
    VISUALIZER_MAX_VERTICES    largest graph a request may carry
    VISUALIZER_SECRET_KEY      Flask session key (random per process if unset)
"""

import os
import secrets
from typing import List, Mapping, Optional

from engine.stepper import SPEED_PRESETS
from structures.errors import InvalidInputError


ENV_PREFIX = "VISUALIZER_"


class VisualizerConfig:
    # logging
    log_level:      str = "INFO"

    # playback
    default_speed:  str = "medium"

    # input limits
    max_array_length: int = 50
    max_vertices:     int = 26
    max_list_length:  int = 30
    max_tree_size:    int = 31

    # demo data
    default_array:  List[int] = [64, 34, 25, 12, 22, 11, 90]
    default_list:   List[int] = [10, 20, 30, 40]
    default_tree:   List[int] = [50, 30, 70, 20, 40, 60, 80]

    # web
    secret_key:     Optional[str] = None

    def __init__(self, **overrides):
        for name, value in overrides.items():
            if not hasattr(type(self), name) or name.startswith("_"):
                raise InvalidInputError(f"Unknown config option '{name}'")
            setattr(self, name, value)
        self.default_array = list(self.default_array)
        self.default_list  = list(self.default_list)
        self.default_tree  = list(self.default_tree)
        if self.secret_key is None:
            self.secret_key = secrets.token_hex(32)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VisualizerConfig":
        environ = os.environ if environ is None else environ
        overrides = {}

        if ENV_PREFIX + "LOG_LEVEL" in environ:
            overrides["log_level"] = environ[ENV_PREFIX + "LOG_LEVEL"].upper()
        if ENV_PREFIX + "DEFAULT_SPEED" in environ:
            speed = environ[ENV_PREFIX + "DEFAULT_SPEED"].lower()
            if speed not in SPEED_PRESETS:
                raise InvalidInputError(
                    f"{ENV_PREFIX}DEFAULT_SPEED must be one of {sorted(SPEED_PRESETS)}, got {speed!r}"
                )
            overrides["default_speed"] = speed
        if ENV_PREFIX + "SECRET_KEY" in environ:
            overrides["secret_key"] = environ[ENV_PREFIX + "SECRET_KEY"]
        if ENV_PREFIX + "MAX_ARRAY" in environ:
            overrides["max_array_length"] = _positive_int(environ, "MAX_ARRAY")
        if ENV_PREFIX + "MAX_VERTICES" in environ:
            overrides["max_vertices"] = _positive_int(environ, "MAX_VERTICES")

        return cls(**overrides)


def _positive_int(environ: Mapping[str, str], suffix: str) -> int:
    raw = environ[ENV_PREFIX + suffix]
    try:
        value = int(raw)
    except ValueError:
        raise InvalidInputError(f"{ENV_PREFIX}{suffix} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise InvalidInputError(f"{ENV_PREFIX}{suffix} must be positive, got {value}")
    return value
