"""Weighted draw and slot angle mapping.

Probability space and angle space both index segments by list position, so
the index returned by ``draw_index`` is the only thing that crosses between
them.
"""

from typing import Protocol, Sequence

from spinwheel.wheel.segments import Segment, EmptySegmentsError

FULL_TURN = 360.0


class RandomSource(Protocol):
    """Anything that can supply uniform draws, e.g. ``random.Random``."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...


def draw_index(segments: Sequence[Segment], r: float) -> int:
    """Pick a segment index for a uniform draw ``r`` in [0, 1).

    Walks segments in list order accumulating probability and returns the
    first index whose cumulative total reaches ``r``. When the total never
    reaches ``r`` (probabilities sum below 1) the last segment wins.
    """
    if not segments:
        raise EmptySegmentsError("Cannot draw from an empty wheel")

    cumulative = 0.0
    for index, segment in enumerate(segments):
        cumulative += segment.probability
        if r <= cumulative:
            return index
    return len(segments) - 1


def slot_width(count: int) -> float:
    """Angular width of one slot in degrees."""
    if count <= 0:
        raise EmptySegmentsError("A wheel needs at least one segment")
    return FULL_TURN / count


def target_angle(index: int, count: int) -> float:
    """Start angle of slot ``index`` on a wheel of ``count`` slots."""
    if not 0 <= index < count:
        raise IndexError(f"Slot {index} out of range for {count} slots")
    return index * slot_width(count)


def full_turns(rng: RandomSource, min_turns: int = 5, extra_turns: int = 3) -> float:
    """Whole-turn spin-up in degrees: ``min_turns`` plus up to ``extra_turns`` more."""
    return FULL_TURN * (min_turns + rng.randint(0, extra_turns))
