"""Monte Carlo weight conformance."""

import unittest

from spinwheel.wheel.segments import DEFAULT_SEGMENTS, Segment
from spinwheel.wheel.simulation import effective_probabilities, simulate_draws

from tests.helpers import abc_segments


class TestEffectiveProbabilities(unittest.TestCase):

    def test_exact_total(self):
        probs = effective_probabilities(abc_segments())
        for got, want in zip(probs, [0.5, 0.3, 0.2]):
            self.assertAlmostEqual(got, want)

    def test_shortfall_goes_to_last(self):
        segs = [
            Segment("a", 1, "#000000", 0.5),
            Segment("b", 1, "#000000", 0.3),
            Segment("c", 1, "#000000", 0.1),
        ]
        probs = effective_probabilities(segs)
        self.assertAlmostEqual(probs[2], 0.2)
        self.assertAlmostEqual(sum(probs), 1.0)

    def test_excess_truncates_tail(self):
        segs = [
            Segment("a", 1, "#000000", 0.6),
            Segment("b", 1, "#000000", 0.6),
            Segment("c", 1, "#000000", 0.2),
        ]
        probs = effective_probabilities(segs)
        self.assertAlmostEqual(probs[0], 0.6)
        self.assertAlmostEqual(probs[1], 0.4)
        self.assertEqual(probs[2], 0.0)


class TestSimulateDraws(unittest.TestCase):

    def test_default_wheel_within_one_percent(self):
        stats = simulate_draws(DEFAULT_SEGMENTS, rounds=100_000, seed=42)
        self.assertEqual(sum(stats.counts), 100_000)
        self.assertLess(stats.max_deviation, 0.01)
        for freq, segment in zip(stats.frequencies, DEFAULT_SEGMENTS):
            self.assertAlmostEqual(freq, segment.probability, delta=0.01)

    def test_seed_is_reproducible(self):
        a = simulate_draws(abc_segments(), rounds=5_000, seed=9)
        b = simulate_draws(abc_segments(), rounds=5_000, seed=9)
        self.assertEqual(a.counts, b.counts)

    def test_mean_value_tracks_expected(self):
        stats = simulate_draws(abc_segments(), rounds=50_000, seed=1)
        self.assertAlmostEqual(stats.expected_value, 0.5 * 1 + 0.3 * 2 + 0.2 * 3)
        self.assertAlmostEqual(stats.mean_value, stats.expected_value, delta=0.05)

    def test_notes_flag_unreachable_segments(self):
        segs = [
            Segment("a", 1, "#000000", 1.0),
            Segment("b", 1, "#000000", 0.5),
        ]
        stats = simulate_draws(segs, rounds=1_000, seed=3)
        self.assertEqual(stats.counts, [1_000, 0])
        self.assertTrue(any("unreachable" in note for note in stats.notes))

    def test_to_dict(self):
        data = simulate_draws(abc_segments(), rounds=100, seed=0).to_dict()
        self.assertEqual(data["rounds"], 100)
        self.assertEqual([s["label"] for s in data["segments"]], ["A", "B", "C"])

    def test_rounds_must_be_positive(self):
        with self.assertRaises(ValueError):
            simulate_draws(abc_segments(), rounds=0)


if __name__ == "__main__":
    unittest.main()
