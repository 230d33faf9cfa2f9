"""Command line entry point."""

import asyncio
import io
import json
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from spinwheel.main import build_parser, main, resolve_segments, run_spins
from spinwheel.settings import Settings, WheelSettings
from spinwheel.wheel.segments import DEFAULT_SEGMENTS

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def run_cli(*argv: str) -> tuple[int, str]:
    out = io.StringIO()
    with redirect_stdout(out):
        code = main(list(argv))
    return code, out.getvalue()


class TestCli(unittest.TestCase):

    def test_parser_requires_command(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args([])

    def test_simulate_json(self):
        code, out = run_cli("simulate", "--rounds", "2000", "--seed", "5", "--json")
        self.assertEqual(code, 0)
        report = json.loads(out)
        self.assertEqual(report["rounds"], 2000)
        self.assertEqual(len(report["segments"]), len(DEFAULT_SEGMENTS))

    def test_simulate_table(self):
        code, out = run_cli("simulate", "--rounds", "500")
        self.assertEqual(code, 0)
        self.assertIn("max deviation", out)

    def test_spin_headless(self):
        code, out = run_cli("spin", "--count", "3", "--seed", "1", "--settle-ms", "0")
        self.assertEqual(code, 0)
        self.assertIn("spin 3:", out)
        self.assertIn("total", out)

    def test_bundled_wheel_by_name(self):
        settings = Settings(_env_file=None, config_path=PROJECT_ROOT / "config")
        segments = resolve_segments(Path("welcome"), settings)
        self.assertEqual(segments[-1].label, "1000 SC")

    def test_default_segments_without_config(self):
        settings = Settings(_env_file=None)
        self.assertEqual(resolve_segments(None, settings), DEFAULT_SEGMENTS)

    def test_bad_config_exit_code(self):
        code, _ = run_cli("simulate", "--config", str(PROJECT_ROOT / "config" / "missing.yaml"))
        self.assertEqual(code, 2)

    def test_negative_settle_ms_rejected(self):
        code, out = run_cli("spin", "--settle-ms", "-5")
        self.assertEqual(code, 2)
        self.assertNotIn("spin 1:", out)

    def test_spin_waits_for_win_sequence(self):
        wheel_settings = WheelSettings(settle_ms=0)
        with self.assertLogs("spinwheel.audio.cues", level="INFO") as logs:
            results = asyncio.run(run_spins(DEFAULT_SEGMENTS, wheel_settings, 1, seed=1))

        self.assertEqual(len(results), 1)
        # Every win sequence ends with a delayed coin drop
        self.assertIn("coin_drop", logs.output[-1])


if __name__ == "__main__":
    unittest.main()
