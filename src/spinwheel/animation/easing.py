"""Easing functions for wheel animation.

All functions take a normalized time t (0.0 to 1.0) and return a normalized
value. ``cubic_bezier`` builds CSS-style timing curves; the wheel's own
deceleration is ``Easing.WHEEL_SETTLE``.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()

    EASE_IN_QUAD = auto()
    EASE_OUT_QUAD = auto()
    EASE_IN_OUT_QUAD = auto()

    EASE_OUT_CUBIC = auto()
    EASE_IN_OUT_CUBIC = auto()

    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()

    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_BACK = auto()

    # cubic-bezier(0.23, 1, 0.32, 1): fast start, long soft stop
    WHEEL_SETTLE = auto()


EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_in_quad(t: float) -> float:
    """Accelerate from zero velocity."""
    return t * t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_in_out_quad(t: float) -> float:
    """Accelerate then decelerate."""
    if t < 0.5:
        return 2 * t * t
    return 1 - pow(-2 * t + 2, 2) / 2


def ease_out_cubic(t: float) -> float:
    return 1 - pow(1 - t, 3)


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return 1 - pow(-2 * t + 2, 3) / 2


def ease_out_quart(t: float) -> float:
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_back(t: float) -> float:
    """Overshoot slightly, then settle."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * pow(t - 1, 3) + c1 * pow(t - 1, 2)


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> EasingFunc:
    """Build a timing function equivalent to CSS ``cubic-bezier(x1, y1, x2, y2)``.

    The curve runs from (0, 0) to (1, 1). For a given t on the x axis the
    curve parameter is found with Newton's method, falling back to bisection
    where the slope is too flat.

    Raises:
        ValueError: If x1 or x2 is outside [0, 1]
    """
    if not (0.0 <= x1 <= 1.0 and 0.0 <= x2 <= 1.0):
        raise ValueError("cubic_bezier x control points must be within [0, 1]")

    cx = 3.0 * x1
    bx = 3.0 * (x2 - x1) - cx
    ax = 1.0 - cx - bx
    cy = 3.0 * y1
    by = 3.0 * (y2 - y1) - cy
    ay = 1.0 - cy - by

    def sample_x(s: float) -> float:
        return ((ax * s + bx) * s + cx) * s

    def sample_y(s: float) -> float:
        return ((ay * s + by) * s + cy) * s

    def slope_x(s: float) -> float:
        return (3.0 * ax * s + 2.0 * bx) * s + cx

    def solve_x(x: float, epsilon: float = 1e-7) -> float:
        s = x
        for _ in range(8):
            err = sample_x(s) - x
            if abs(err) < epsilon:
                return s
            d = slope_x(s)
            if abs(d) < 1e-6:
                break
            s -= err / d

        lo, hi = 0.0, 1.0
        s = x
        while lo < hi:
            current = sample_x(s)
            if abs(current - x) < epsilon:
                return s
            if x > current:
                lo = s
            else:
                hi = s
            s = (hi - lo) / 2.0 + lo
            if hi - lo < epsilon:
                break
        return s

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        return sample_y(solve_x(t))

    return ease


wheel_settle = cubic_bezier(0.23, 1.0, 0.32, 1.0)


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_IN_QUAD: ease_in_quad,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_IN_OUT_QUAD: ease_in_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_IN_OUT_CUBIC: ease_in_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_BACK: ease_out_back,
    Easing.WHEEL_SETTLE: wheel_settle,
}


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        try:
            easing = Easing[easing.upper()]
        except KeyError:
            raise ValueError(f"Unknown easing function: {easing}") from None

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function."""
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t
