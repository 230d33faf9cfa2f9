"""
Monte Carlo check of a segment set.

Runs the wheel's draw many times with a seeded generator and compares the
observed selection frequencies with what the draw rule should produce.

Usage:
    from spinwheel.wheel.simulation import simulate_draws
    stats = simulate_draws(DEFAULT_SEGMENTS, rounds=100_000)
    print(stats.max_deviation)
"""

from dataclasses import dataclass, field
from typing import Sequence
import logging
import random

import numpy as np

from spinwheel.wheel.draw import draw_index
from spinwheel.wheel.segments import Segment, validate_segments

logger = logging.getLogger(__name__)


@dataclass
class DrawStats:
    """Simulation results for one segment set."""
    rounds: int
    seed: int
    labels: list[str]
    counts: list[int]
    frequencies: list[float]
    expected: list[float]
    mean_value: float
    expected_value: float
    max_deviation: float = 0.0
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "rounds": self.rounds,
            "seed": self.seed,
            "segments": [
                {
                    "label": label,
                    "count": count,
                    "frequency": round(freq, 6),
                    "expected": round(exp, 6),
                }
                for label, count, freq, exp in zip(
                    self.labels, self.counts, self.frequencies, self.expected
                )
            ],
            "mean_value": round(self.mean_value, 4),
            "expected_value": round(self.expected_value, 4),
            "max_deviation": round(self.max_deviation, 6),
            "notes": self.notes,
        }


def effective_probabilities(segments: Sequence[Segment]) -> list[float]:
    """Exact selection probability of each segment under the draw rule.

    Mass beyond a cumulative total of 1 is cut off, and any shortfall
    below 1 is added to the last segment.
    """
    segments = validate_segments(segments)
    probs = []
    cumulative = 0.0
    for segment in segments:
        start = min(cumulative, 1.0)
        cumulative += segment.probability
        probs.append(max(0.0, min(cumulative, 1.0) - start))
    probs[-1] += max(0.0, 1.0 - cumulative)
    return probs


def simulate_draws(
    segments: Sequence[Segment],
    rounds: int = 100_000,
    seed: int = 42,
) -> DrawStats:
    """Run ``rounds`` draws and tabulate the results."""
    if rounds <= 0:
        raise ValueError("rounds must be positive")

    segments = validate_segments(segments)
    rng = random.Random(seed)

    picks = np.fromiter(
        (draw_index(segments, rng.random()) for _ in range(rounds)),
        dtype=np.int64,
        count=rounds,
    )
    counts = np.bincount(picks, minlength=len(segments))
    frequencies = counts / rounds
    expected = np.array(effective_probabilities(segments))
    values = np.array([s.value for s in segments], dtype=float)

    notes = []
    unreachable = [s.label for s, p in zip(segments, expected) if p == 0.0 and s.probability > 0]
    if unreachable:
        notes.append(f"unreachable segments: {', '.join(unreachable)}")
    shortfall = 1.0 - sum(s.probability for s in segments)
    if shortfall > 1e-9:
        notes.append(f"last segment absorbs {shortfall:.4f} unassigned probability")

    stats = DrawStats(
        rounds=rounds,
        seed=seed,
        labels=[s.label for s in segments],
        counts=counts.tolist(),
        frequencies=frequencies.tolist(),
        expected=expected.tolist(),
        mean_value=float(values[picks].mean()),
        expected_value=float((values * expected).sum()),
        max_deviation=float(np.abs(frequencies - expected).max()),
        notes=notes,
    )
    logger.info(
        f"Simulated {rounds} draws (seed {seed}): max deviation {stats.max_deviation:.5f}"
    )
    return stats
