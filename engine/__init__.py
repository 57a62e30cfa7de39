"""
engine/
-------
Consumers of step logs: replay cursor and run recorder.

    from engine import Stepper, Recorder, compare
"""

from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
