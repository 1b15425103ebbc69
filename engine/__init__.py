"""
engine/
-------
Playback & recording layer.

    from engine import Stepper, Recorder, compare
"""

from engine.scheduler import AsyncioScheduler, ManualScheduler
from engine.stepper   import Stepper, StepperState, SPEED_PRESETS, speed_to_delay
from engine.recorder  import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "speed_to_delay",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
