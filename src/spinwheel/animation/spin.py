"""Spin animation: displayed rotation over time.

The wheel itself only knows start and end rotation. ``SpinAnimation`` maps
elapsed time onto that range with the settle curve, and ``WheelAnimator``
keeps one running per accepted spin by listening on the event bus.
"""

from typing import Callable, Optional
import logging

from spinwheel.animation.easing import Easing, get_easing
from spinwheel.core.events import Event, EventBus, EventType

logger = logging.getLogger(__name__)


class SpinAnimation:
    """Eased rotation from ``start`` to ``end`` degrees over ``duration_ms``."""

    def __init__(
        self,
        start: float,
        end: float,
        duration_ms: float,
        easing: Easing | str = Easing.WHEEL_SETTLE,
    ) -> None:
        self.start = start
        self.end = end
        self.duration_ms = duration_ms
        self._ease = get_easing(easing)
        self._elapsed_ms = 0.0

    @property
    def progress(self) -> float:
        """Normalized time, 0.0 to 1.0."""
        if self.duration_ms <= 0:
            return 1.0
        return min(1.0, self._elapsed_ms / self.duration_ms)

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0

    @property
    def rotation(self) -> float:
        if self.finished:
            return self.end
        return self.start + (self.end - self.start) * self._ease(self.progress)

    def update(self, delta_ms: float) -> float:
        """Advance the animation and return the new rotation."""
        self._elapsed_ms += max(0.0, delta_ms)
        return self.rotation

    def finish(self) -> None:
        """Jump to the end."""
        self._elapsed_ms = self.duration_ms


class WheelAnimator:
    """
    Drives the displayed rotation of a wheel from bus events.

    SPIN_STARTED starts a new animation, TICK advances it, SPIN_SETTLED
    snaps it to the end so the picture always rests on the committed
    rotation.
    """

    def __init__(
        self,
        event_bus: EventBus,
        easing: Easing | str = Easing.WHEEL_SETTLE,
        on_frame: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._easing = easing
        self._on_frame = on_frame
        self._animation: Optional[SpinAnimation] = None
        self._rotation = 0.0
        self._unsubscribe = [
            event_bus.subscribe(EventType.SPIN_STARTED, self._on_spin_started),
            event_bus.subscribe(EventType.SPIN_SETTLED, self._on_spin_settled),
            event_bus.subscribe(EventType.TICK, self._on_tick),
        ]

    @property
    def rotation(self) -> float:
        """Rotation to draw this frame, in degrees."""
        return self._rotation

    @property
    def animating(self) -> bool:
        return self._animation is not None and not self._animation.finished

    def close(self) -> None:
        """Stop listening to the bus."""
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _on_spin_started(self, event: Event) -> None:
        outcome = event.data["outcome"]
        self._animation = SpinAnimation(
            outcome.start_rotation,
            outcome.end_rotation,
            event.data.get("duration_ms", 0),
            self._easing,
        )
        self._set_rotation(self._animation.rotation)
        logger.debug(
            f"Animating {outcome.start_rotation:.1f} -> {outcome.end_rotation:.1f}"
        )

    def _on_tick(self, event: Event) -> None:
        if self._animation is None or self._animation.finished:
            return
        self._set_rotation(self._animation.update(event.data.get("delta_ms", 0.0)))

    def _on_spin_settled(self, event: Event) -> None:
        if self._animation is not None:
            self._animation.finish()
            self._set_rotation(self._animation.rotation)

    def _set_rotation(self, rotation: float) -> None:
        self._rotation = rotation
        if self._on_frame is not None:
            self._on_frame(rotation)
