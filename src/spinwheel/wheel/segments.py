"""
Wheel segment records and segment set loading.

A segment's position in its list is its identity on the wheel: it fixes the
angular slot and the order in which probability mass is accumulated.
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Iterable, Sequence
import logging
import math

import yaml

logger = logging.getLogger(__name__)


class SegmentConfigError(ValueError):
    """Segment configuration is unusable."""


class EmptySegmentsError(SegmentConfigError):
    """A wheel was configured with no segments."""


@dataclass(frozen=True)
class Segment:
    """One weighted slice of the wheel.

    Attributes:
        label: Display text
        value: Payout passed through to the spin result
        color: Hex color string, e.g. "#8B5CF6"
        probability: Selection weight in [0, 1]
    """
    label: str
    value: float
    color: str
    probability: float

    def __post_init__(self):
        if not 0.0 <= self.probability <= 1.0:
            raise SegmentConfigError(
                f"Segment {self.label!r} probability must be in [0, 1], got {self.probability}"
            )

    def rgb(self) -> tuple[int, int, int]:
        """Convert the hex color to an RGB tuple."""
        hex_color = self.color.lstrip("#")
        if len(hex_color) == 3:
            hex_color = "".join(c * 2 for c in hex_color)
        return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# Daily bonus wheel
DEFAULT_SEGMENTS: tuple[Segment, ...] = (
    Segment("$10", 10, "#8B5CF6", 0.30),
    Segment("$25", 25, "#06B6D4", 0.25),
    Segment("$50", 50, "#10B981", 0.20),
    Segment("$100", 100, "#F59E0B", 0.15),
    Segment("$250", 250, "#EF4444", 0.08),
    Segment("$500", 500, "#EC4899", 0.02),
)

PROBABILITY_TOLERANCE = 1e-9


def probability_total(segments: Iterable[Segment]) -> float:
    """Sum of all segment probabilities."""
    return math.fsum(s.probability for s in segments)


def validate_segments(segments: Sequence[Segment] | None) -> tuple[Segment, ...]:
    """
    Freeze a segment list for use by a wheel.

    Order is preserved as given. Totals away from 1 are allowed but logged:
    below 1 the leftover mass falls to the last segment, above 1 the
    trailing segments can become unreachable.

    Raises:
        EmptySegmentsError: If there are no segments
    """
    if not segments:
        raise EmptySegmentsError("A wheel needs at least one segment")

    frozen = tuple(segments)
    total = probability_total(frozen)
    if abs(total - 1.0) > PROBABILITY_TOLERANCE:
        if total < 1.0:
            logger.warning(
                f"Segment probabilities sum to {total:.6f}; "
                f"remaining {1.0 - total:.6f} goes to last segment {frozen[-1].label!r}"
            )
        else:
            logger.warning(
                f"Segment probabilities sum to {total:.6f}; trailing segments may be unreachable"
            )
    return frozen


def segment_from_dict(data: dict[str, Any]) -> Segment:
    """Build a segment from a mapping with label, value, color, probability."""
    try:
        return Segment(
            label=str(data["label"]),
            value=float(data["value"]),
            color=str(data.get("color", "#FFFFFF")),
            probability=float(data["probability"]),
        )
    except SegmentConfigError:
        raise
    except KeyError as e:
        raise SegmentConfigError(f"Segment entry missing field {e.args[0]!r}: {data}") from e
    except (TypeError, ValueError) as e:
        raise SegmentConfigError(f"Malformed segment entry {data}: {e}") from e


@dataclass
class WheelConfig:
    """A named segment set, as stored in YAML."""
    name: str = "default"
    segments: tuple[Segment, ...] = DEFAULT_SEGMENTS

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "WheelConfig":
        """Create a wheel config from parsed YAML data."""
        if not isinstance(data, dict):
            raise SegmentConfigError("Wheel config must be a mapping")

        entries = data.get("segments") or []
        if not isinstance(entries, list):
            raise SegmentConfigError("'segments' must be a list")

        segments = [segment_from_dict(entry) for entry in entries]
        return cls(
            name=str(data.get("name", "default")),
            segments=validate_segments(segments),
        )


def load_wheel_config(path: Path | str) -> WheelConfig:
    """
    Load a segment set from a YAML file.

    Args:
        path: YAML file with ``name`` and a ``segments`` list

    Returns:
        WheelConfig instance
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    config = WheelConfig.from_yaml(data)
    logger.info(f"Loaded wheel {config.name!r} with {len(config.segments)} segments from {path}")
    return config
