"""
stepper.py — Step Log Replay Cursor
====================================
The Stepper walks a finished step log back and forth.  Engines run to
completion before replay begins, so the cursor never drives computation;
it only chooses which Step is "current".

State machine:
    IDLE     →  load()   →  PAUSED
    PAUSED   →  play()   →  PLAYING
    PLAYING  →  pause()  →  PAUSED
    any      →  cursor reaches the last step → FINISHED
    any      →  reset()  →  IDLE

There is no timer in here.  `delay` is the per-step pause the player
(browser, CLI, test) should wait between next_step() calls while
PLAYING; a test can replay at zero delay.
"""

from enum import Enum
from typing import Callable, Iterable, Optional, Tuple

from algorithms.step import Step
from structures.errors import InvalidInputError


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":    1.0,    # teaching mode
    "medium":  0.5,
    "fast":    0.15,
    "instant": 0.0,
}

MIN_DELAY = 0.0


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The loaded step log.
        current_idx : Index into `steps` that is currently displayed (-1 when idle).
        delay       : Seconds the player should wait between steps while PLAYING.
        on_step     : Optional callback(Step) fired every time the current step changes.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None, speed: str = "medium"):
        self.steps:       Tuple[Step, ...] = ()
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.delay:       float        = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Step], None]] = on_step
        self.set_speed(speed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Iterable[Step], position: int = 0) -> None:
        """Attach a step log and show `position` (step 0 by default)."""
        steps = tuple(steps)
        if not steps:
            self.reset()
            return
        if not 0 <= position < len(steps):
            raise InvalidInputError(f"Step {position} is out of range (0..{len(steps) - 1})")
        self.steps = steps
        self.state = StepperState.PAUSED
        self._goto(position)

    def reset(self) -> None:
        """Back to IDLE; load() must be called again."""
        self.steps       = ()
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step.  Returns False if already at the end."""
        if not self.steps or self.current_idx >= len(self.steps) - 1:
            if self.steps:
                self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index; out-of-range indices are refused."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        if idx < len(self.steps) - 1 and self.state is StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        self.goto_step(0)

    def jump_to_end(self) -> None:
        """Jump to the final step."""
        self.goto_step(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.IDLE, StepperState.FINISHED):
            return
        self.state = StepperState.PLAYING

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if not isinstance(preset, str) or preset not in SPEED_PRESETS:
            raise InvalidInputError(f"Unknown speed preset '{preset}'; expected one of {sorted(SPEED_PRESETS)}")
        self.delay = SPEED_PRESETS[preset]

    def set_delay(self, seconds: float) -> None:
        self.delay = max(MIN_DELAY, float(seconds))

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    def to_dict(self) -> dict:
        step = self.current_step
        return {
            "state":        self.state.value,
            "current_idx":  self.current_idx,
            "total_steps":  self.total_steps,
            "delay":        self.delay,
            "step":         step.to_dict() if step is not None else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if idx == len(self.steps) - 1:
            self.state = StepperState.FINISHED
        if self.on_step is not None:
            self.on_step(self.steps[idx])
