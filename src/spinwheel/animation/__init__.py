"""Animation module for spinwheel."""

from spinwheel.animation.easing import Easing, cubic_bezier, get_easing, interpolate
from spinwheel.animation.spin import SpinAnimation, WheelAnimator

__all__ = [
    "Easing",
    "cubic_bezier",
    "get_easing",
    "interpolate",
    "SpinAnimation",
    "WheelAnimator",
]
