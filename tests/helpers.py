"""Shared fixtures for the spinwheel tests."""

from spinwheel.wheel.segments import Segment


class ScriptedRandom:
    """Random source returning queued draws.

    ``random()`` pops from ``draws`` (repeating the last one when exhausted);
    ``randint`` always returns ``extra`` clamped into range.
    """

    def __init__(self, *draws: float, extra: int = 0):
        self.draws = list(draws) or [0.0]
        self.extra = extra
        self.random_calls = 0

    def random(self) -> float:
        self.random_calls += 1
        if len(self.draws) > 1:
            return self.draws.pop(0)
        return self.draws[0]

    def randint(self, a: int, b: int) -> int:
        return max(a, min(b, self.extra))


def abc_segments():
    return [
        Segment("A", 1, "#ff0000", 0.5),
        Segment("B", 2, "#00ff00", 0.3),
        Segment("C", 3, "#0000ff", 0.2),
    ]
