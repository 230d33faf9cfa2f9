"""
Command line entry point for spinwheel.

Commands:
    simulate  Monte Carlo check of a segment set
    spin      Spin the wheel headless on the asyncio loop
    window    Open the pygame simulator
"""

import argparse
import asyncio
import json
import logging
import random
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from spinwheel.settings import Settings, WheelSettings, get_settings
from spinwheel.wheel.segments import DEFAULT_SEGMENTS, Segment, SegmentConfigError, load_wheel_config

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def resolve_segments(config_file: Path | None, settings: Settings) -> tuple[Segment, ...]:
    """Segments from --config, else from settings, else the built-in set.

    A bare name such as ``welcome`` refers to a bundled wheel file.
    """
    path = config_file or settings.wheel.segments_file
    if path is None:
        return DEFAULT_SEGMENTS
    path = Path(path)
    if not path.suffix and not path.exists():
        path = settings.wheels_path / f"{path.name}.yaml"
    return load_wheel_config(path).segments


def cmd_simulate(args: argparse.Namespace, settings: Settings) -> int:
    from spinwheel.wheel.simulation import simulate_draws

    segments = resolve_segments(args.config, settings)
    stats = simulate_draws(segments, rounds=args.rounds, seed=args.seed)

    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
        return 0

    print(f"{'SEGMENT':<12}{'COUNT':>10}{'OBSERVED':>12}{'EXPECTED':>12}")
    for label, count, freq, exp in zip(stats.labels, stats.counts, stats.frequencies, stats.expected):
        print(f"{label:<12}{count:>10}{freq:>12.4f}{exp:>12.4f}")
    print(f"mean payout {stats.mean_value:.3f} (expected {stats.expected_value:.3f})")
    print(f"max deviation {stats.max_deviation:.5f}")
    for note in stats.notes:
        print(f"note: {note}")
    return 0


async def run_spins(
    segments: Sequence[Segment],
    wheel_settings: WheelSettings,
    count: int,
    seed: int | None,
) -> list[Segment]:
    """Spin ``count`` times back to back, waiting for each to settle."""
    from spinwheel.audio.cues import CuePlayer
    from spinwheel.core.events import EventBus
    from spinwheel.wheel.reward_wheel import RewardWheel
    from spinwheel.wheel.scheduler import AsyncioScheduler

    loop = asyncio.get_running_loop()
    event_bus = EventBus()
    scheduler = AsyncioScheduler(loop)
    cues = CuePlayer(event_bus, scheduler)

    results: list[Segment] = []
    settled: asyncio.Future | None = None

    def on_spin(segment: Segment) -> None:
        results.append(segment)
        if settled is not None and not settled.done():
            settled.set_result(segment)

    wheel = RewardWheel.from_settings(
        wheel_settings,
        segments,
        on_spin=on_spin,
        rng=random.Random(seed),
        scheduler=scheduler,
        event_bus=event_bus,
    )

    for _ in range(count):
        settled = loop.create_future()
        wheel.spin()
        await settled

    # Win sequences outlive the settle; play them out before the loop closes
    while cues.pending:
        await asyncio.sleep(0.05)

    return results


def cmd_spin(args: argparse.Namespace, settings: Settings) -> int:
    segments = resolve_segments(args.config, settings)
    wheel_settings = settings.wheel
    if args.settle_ms is not None:
        wheel_settings = WheelSettings.model_validate(
            {**wheel_settings.model_dump(), "settle_ms": args.settle_ms}
        )

    seed = args.seed if args.seed is not None else settings.seed
    results = asyncio.run(run_spins(segments, wheel_settings, args.count, seed))

    total = sum(s.value for s in results)
    for i, segment in enumerate(results, 1):
        print(f"spin {i}: {segment.label} ({segment.value:g})")
    print(f"total {total:g}")
    return 0


def cmd_window(args: argparse.Namespace, settings: Settings) -> int:
    from spinwheel.simulator.window import SimulatorWindow

    segments = resolve_segments(args.config, settings)
    seed = args.seed if args.seed is not None else settings.seed
    window = SimulatorWindow(segments, settings=settings, seed=seed)
    asyncio.run(window.run())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spinwheel", description="Weighted reward wheel")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Check draw frequencies against probabilities")
    sim.add_argument("--rounds", type=int, default=100_000)
    sim.add_argument("--seed", type=int, default=42)
    sim.add_argument("--config", type=Path, help="YAML segment file")
    sim.add_argument("--json", action="store_true", help="Print JSON report")
    sim.set_defaults(func=cmd_simulate)

    spin = sub.add_parser("spin", help="Spin headless and print outcomes")
    spin.add_argument("--count", type=int, default=1)
    spin.add_argument("--seed", type=int)
    spin.add_argument("--settle-ms", type=int, dest="settle_ms", help="Override settle duration")
    spin.add_argument("--config", type=Path, help="YAML segment file")
    spin.set_defaults(func=cmd_spin)

    win = sub.add_parser("window", help="Open the pygame simulator")
    win.add_argument("--seed", type=int)
    win.add_argument("--config", type=Path, help="YAML segment file")
    win.set_defaults(func=cmd_window)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()

    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(args.debug or settings.debug)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (SegmentConfigError, FileNotFoundError) as e:
        logger.error(f"Bad wheel configuration: {e}")
        return 2
    except ValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
