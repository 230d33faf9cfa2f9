"""Segment records, YAML loading, settings."""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError

from spinwheel.settings import Settings
from spinwheel.wheel.segments import (
    DEFAULT_SEGMENTS,
    EmptySegmentsError,
    Segment,
    SegmentConfigError,
    WheelConfig,
    load_wheel_config,
    probability_total,
    validate_segments,
)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class TestSegment(unittest.TestCase):

    def test_rgb(self):
        self.assertEqual(Segment("$50", 50, "#8B5CF6", 0.3).rgb(), (139, 92, 246))
        self.assertEqual(Segment("x", 0, "#fff", 0.1).rgb(), (255, 255, 255))

    def test_probability_range(self):
        with self.assertRaises(SegmentConfigError):
            Segment("bad", 1, "#000000", 1.5)
        with self.assertRaises(SegmentConfigError):
            Segment("bad", 1, "#000000", -0.1)

    def test_default_segments_sum_to_one(self):
        self.assertAlmostEqual(probability_total(DEFAULT_SEGMENTS), 1.0)
        self.assertEqual([s.value for s in DEFAULT_SEGMENTS], [10, 25, 50, 100, 250, 500])

    def test_validate_keeps_order(self):
        segs = [Segment(str(i), i, "#000000", 0.25) for i in range(4)]
        frozen = validate_segments(segs)
        self.assertIsInstance(frozen, tuple)
        self.assertEqual([s.label for s in frozen], ["0", "1", "2", "3"])

    def test_validate_rejects_empty(self):
        with self.assertRaises(EmptySegmentsError):
            validate_segments([])
        self.assertTrue(issubclass(EmptySegmentsError, ValueError))

    def test_validate_warns_on_short_total(self):
        segs = [Segment("a", 1, "#000000", 0.5), Segment("b", 1, "#000000", 0.4)]
        with self.assertLogs("spinwheel.wheel.segments", level="WARNING") as logs:
            validate_segments(segs)
        self.assertIn("last segment", logs.output[0])


class TestWheelConfig(unittest.TestCase):

    def write_yaml(self, text: str) -> Path:
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False, encoding="utf-8")
        handle.write(text)
        handle.close()
        self.addCleanup(os.unlink, handle.name)
        return Path(handle.name)

    def test_load_bundled_daily_wheel(self):
        config = load_wheel_config(PROJECT_ROOT / "config" / "wheels" / "daily.yaml")
        self.assertEqual(config.name, "daily")
        self.assertEqual(config.segments, DEFAULT_SEGMENTS)

    def test_load_from_file(self):
        path = self.write_yaml(
            "name: tiny\n"
            "segments:\n"
            "  - {label: A, value: 1, color: '#ff0000', probability: 0.5}\n"
            "  - {label: B, value: 2, color: '#00ff00', probability: 0.5}\n"
        )
        config = load_wheel_config(path)
        self.assertEqual(config.name, "tiny")
        self.assertEqual([s.label for s in config.segments], ["A", "B"])
        self.assertEqual(config.segments[1].value, 2.0)

    def test_empty_segment_list(self):
        path = self.write_yaml("name: empty\nsegments: []\n")
        with self.assertRaises(EmptySegmentsError):
            load_wheel_config(path)

    def test_missing_field(self):
        with self.assertRaises(SegmentConfigError):
            WheelConfig.from_yaml({"segments": [{"label": "A", "value": 1}]})

    def test_malformed_value(self):
        with self.assertRaises(SegmentConfigError):
            WheelConfig.from_yaml({"segments": [
                {"label": "A", "value": "lots", "probability": 0.5},
            ]})

    def test_not_a_mapping(self):
        with self.assertRaises(SegmentConfigError):
            WheelConfig.from_yaml(["a", "b"])

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_wheel_config(PROJECT_ROOT / "config" / "wheels" / "nope.yaml")


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings(_env_file=None)
        self.assertEqual(settings.wheel.settle_ms, 4000)
        self.assertEqual(settings.wheel.min_turns, 5)
        self.assertEqual(settings.wheel.extra_turns, 3)
        self.assertEqual(settings.wheel.size, 300)

    def test_env_override(self):
        env = {"SPINWHEEL_WHEEL__SETTLE_MS": "2500", "SPINWHEEL_DEBUG": "true"}
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.wheel.settle_ms, 2500)
        self.assertTrue(settings.debug)

    def test_turn_policy_validated(self):
        with patch.dict(os.environ, {"SPINWHEEL_WHEEL__MIN_TURNS": "0"}):
            with self.assertRaises(ValidationError):
                Settings(_env_file=None)


if __name__ == "__main__":
    unittest.main()
