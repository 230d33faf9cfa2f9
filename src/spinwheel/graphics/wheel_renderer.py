"""Wheel geometry and numpy rasterization.

Angles are in degrees, measured clockwise from the +x axis in screen
coordinates (y grows downward), which is how a CSS ``rotate()`` turns.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple
import math

import numpy as np
from numpy.typing import NDArray

from spinwheel.wheel.draw import slot_width
from spinwheel.wheel.segments import Segment

Color = Tuple[int, int, int]
Point = Tuple[float, float]
Buffer = NDArray[np.uint8]

LABEL_RADIUS_FACTOR = 0.7
RIM_COLOR: Color = (255, 215, 0)
DIVIDER_COLOR: Color = (255, 255, 255)
POINTER_COLOR: Color = (255, 215, 0)


@dataclass(frozen=True)
class SlotGeometry:
    """Unrotated outline of one slot on a wheel of given radius.

    Attributes:
        index: Slot index (segment list position)
        start_angle: Slot start in degrees
        end_angle: Slot end in degrees
        arc_start: Point on the rim at start_angle
        arc_end: Point on the rim at end_angle
        label_anchor: Where the label is centered
        label_angle: Label rotation in degrees
        large_arc: True when the slot spans more than 180 degrees
    """
    index: int
    start_angle: float
    end_angle: float
    arc_start: Point
    arc_end: Point
    label_anchor: Point
    label_angle: float
    large_arc: bool


def _polar(cx: float, cy: float, radius: float, angle: float) -> Point:
    rad = math.radians(angle)
    return (cx + radius * math.cos(rad), cy + radius * math.sin(rad))


def slot_geometry(count: int, radius: float) -> list[SlotGeometry]:
    """Compute slot outlines and label anchors for ``count`` slots.

    The wheel is centered at (radius, radius).
    """
    width = slot_width(count)
    slots = []
    for index in range(count):
        start = index * width
        end = start + width
        mid = start + width / 2
        slots.append(SlotGeometry(
            index=index,
            start_angle=start,
            end_angle=end,
            arc_start=_polar(radius, radius, radius, start),
            arc_end=_polar(radius, radius, radius, end),
            label_anchor=_polar(radius, radius, radius * LABEL_RADIUS_FACTOR, mid),
            label_angle=mid,
            large_arc=width > 180,
        ))
    return slots


def slot_index_map(
    height: int,
    width: int,
    count: int,
    rotation: float,
    cx: float | None = None,
    cy: float | None = None,
) -> NDArray[np.int64]:
    """Slot index under every pixel once the wheel is turned by ``rotation``."""
    cx = (width - 1) / 2 if cx is None else cx
    cy = (height - 1) / 2 if cy is None else cy
    y_indices, x_indices = np.ogrid[:height, :width]
    angles = np.degrees(np.arctan2(y_indices - cy, x_indices - cx))
    local = np.mod(angles - rotation, 360.0)
    return np.minimum((local // slot_width(count)).astype(np.int64), count - 1)


def render_wheel(
    buffer: Buffer,
    segments: Sequence[Segment],
    rotation: float,
    rim: int = 3,
) -> None:
    """Draw the wheel into ``buffer`` (height, width, 3).

    Slices are filled with each segment's color, separated by thin
    dividers, ringed by a rim and topped with a pointer.
    """
    h, w = buffer.shape[:2]
    cx, cy = (w - 1) / 2, (h - 1) / 2
    radius = min(w, h) / 2 - rim - 1

    y_indices, x_indices = np.ogrid[:h, :w]
    dist = np.sqrt((x_indices - cx) ** 2 + (y_indices - cy) ** 2)
    inside = dist <= radius
    rim_mask = (dist > radius) & (dist <= radius + rim)

    slots = slot_index_map(h, w, len(segments), rotation, cx, cy)
    palette = np.array([s.rgb() for s in segments], dtype=np.uint8)
    buffer[inside] = palette[slots[inside]]

    if len(segments) > 1:
        # Divider where neighbouring pixels fall in different slots
        edge = np.zeros((h, w), dtype=bool)
        edge[:, 1:] |= slots[:, 1:] != slots[:, :-1]
        edge[1:, :] |= slots[1:, :] != slots[:-1, :]
        edge &= inside & (dist > 2)
        buffer[edge] = DIVIDER_COLOR

    buffer[rim_mask] = RIM_COLOR
    draw_pointer(buffer, int(round(cx)), 0, max(4, int(radius // 10)))


def draw_pointer(buffer: Buffer, x: int, y: int, size: int, color: Color = POINTER_COLOR) -> None:
    """Downward-pointing triangle with its base on row ``y``."""
    h, w = buffer.shape[:2]
    for row in range(size * 2):
        half = int(size * (1 - row / (size * 2)))
        py = y + row
        if not 0 <= py < h:
            continue
        buffer[py, max(0, x - half):min(w, x + half + 1)] = color
