"""spinwheel - weighted reward wheel with a timed spin lifecycle."""

from spinwheel.core.state import WheelPhase
from spinwheel.wheel.reward_wheel import RewardWheel, SpinOutcome
from spinwheel.wheel.segments import DEFAULT_SEGMENTS, EmptySegmentsError, Segment

__version__ = "0.1.0"

__all__ = [
    "WheelPhase",
    "RewardWheel",
    "SpinOutcome",
    "Segment",
    "DEFAULT_SEGMENTS",
    "EmptySegmentsError",
]
