"""
Weighted reward wheel.

Usage:
    from spinwheel.wheel import RewardWheel, Segment

    async def main():
        wheel = RewardWheel([Segment("A", 1, "#fff", 0.5), ...], on_spin=print)
        wheel.spin()
        await asyncio.sleep(wheel.settle_ms / 1000)

Outside an event loop, pass ``scheduler=FrameScheduler()`` and advance it
with ``tick(delta_ms)``.
"""

from spinwheel.wheel.segments import (
    DEFAULT_SEGMENTS,
    EmptySegmentsError,
    Segment,
    SegmentConfigError,
    WheelConfig,
    load_wheel_config,
)
from spinwheel.wheel.draw import draw_index, slot_width, target_angle
from spinwheel.wheel.scheduler import AsyncioScheduler, FrameScheduler
from spinwheel.wheel.reward_wheel import RewardWheel, SpinOutcome

__all__ = [
    "DEFAULT_SEGMENTS",
    "EmptySegmentsError",
    "Segment",
    "SegmentConfigError",
    "WheelConfig",
    "load_wheel_config",
    "draw_index",
    "slot_width",
    "target_angle",
    "AsyncioScheduler",
    "FrameScheduler",
    "RewardWheel",
    "SpinOutcome",
]
