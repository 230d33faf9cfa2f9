"""Reward wheel - weighted spin with a timed settle.

One outcome per accepted spin. The draw, the target rotation and the switch
to SPINNING all happen synchronously inside ``spin()``; the outcome is
delivered once the settle timer fires. Spins arriving while one is in flight,
or while the wheel is disabled, are dropped.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, TYPE_CHECKING
import logging
import random

from spinwheel.core.events import Event, EventBus, EventType
from spinwheel.core.state import PhaseMachine, WheelPhase
from spinwheel.wheel.draw import RandomSource, draw_index, full_turns, target_angle
from spinwheel.wheel.scheduler import AsyncioScheduler, Scheduler
from spinwheel.wheel.segments import DEFAULT_SEGMENTS, Segment, validate_segments

if TYPE_CHECKING:
    from spinwheel.settings import WheelSettings

logger = logging.getLogger(__name__)

SETTLE_MS = 4000
MIN_TURNS = 5
EXTRA_TURNS = 3


@dataclass(frozen=True)
class SpinOutcome:
    """Everything decided when a spin is accepted."""

    segment: Segment
    index: int
    draw: float
    target_angle: float
    full_turns: float
    start_rotation: float
    end_rotation: float

    def to_dict(self) -> dict:
        return {
            "segment": self.segment.to_dict(),
            "index": self.index,
            "draw": self.draw,
            "target_angle": self.target_angle,
            "full_turns": self.full_turns,
            "start_rotation": self.start_rotation,
            "end_rotation": self.end_rotation,
        }


class RewardWheel:
    """Weighted reward wheel.

    Args:
        segments: Ordered segments; defaults to the daily bonus set
        on_spin: Called with the selected segment after each spin settles
        disabled: When True every spin() is a no-op
        size: Rendering size hint, not used by the draw
        rng: Uniform random source (``random()`` and ``randint()``)
        scheduler: Fires the settle callback; defaults to the asyncio loop
        event_bus: Optional bus for lifecycle events
        settle_ms: Time between accepting a spin and delivering its outcome
        min_turns: Whole turns every spin makes at least
        extra_turns: Upper bound of random whole turns added on top

    Raises:
        EmptySegmentsError: If ``segments`` is empty
    """

    def __init__(
        self,
        segments: Optional[Sequence[Segment]] = None,
        on_spin: Optional[Callable[[Segment], None]] = None,
        *,
        disabled: bool = False,
        size: int = 300,
        rng: Optional[RandomSource] = None,
        scheduler: Optional[Scheduler] = None,
        event_bus: Optional[EventBus] = None,
        settle_ms: float = SETTLE_MS,
        min_turns: int = MIN_TURNS,
        extra_turns: int = EXTRA_TURNS,
    ) -> None:
        self._segments = validate_segments(DEFAULT_SEGMENTS if segments is None else segments)
        if min_turns < 1:
            raise ValueError("min_turns must be at least 1 so rotation always advances")
        if extra_turns < 0:
            raise ValueError("extra_turns cannot be negative")

        self.on_spin = on_spin
        self.size = size
        self._disabled = disabled
        self._rng = rng or random.Random()
        self._scheduler = scheduler or AsyncioScheduler()
        self._event_bus = event_bus
        self._settle_ms = settle_ms
        self._min_turns = min_turns
        self._extra_turns = extra_turns

        self._rotation = 0.0
        self._phases = PhaseMachine()
        self._phases.add_listener(self._on_phase_changed)
        self._last_outcome: Optional[SpinOutcome] = None

        logger.info(f"RewardWheel created with {len(self._segments)} segments")

    @classmethod
    def from_settings(
        cls,
        settings: "WheelSettings",
        segments: Optional[Sequence[Segment]] = None,
        **kwargs,
    ) -> "RewardWheel":
        """Build a wheel using timing and turn policy from settings."""
        kwargs.setdefault("size", settings.size)
        return cls(
            segments,
            settle_ms=settings.settle_ms,
            min_turns=settings.min_turns,
            extra_turns=settings.extra_turns,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def rotation(self) -> float:
        """Cumulative rotation in degrees. Never decreases."""
        return self._rotation

    @property
    def phase(self) -> WheelPhase:
        return self._phases.phase

    @property
    def is_spinning(self) -> bool:
        return self._phases.phase == WheelPhase.SPINNING

    @property
    def settle_ms(self) -> float:
        return self._settle_ms

    @property
    def last_outcome(self) -> Optional[SpinOutcome]:
        """Outcome of the most recently accepted spin, settled or not."""
        return self._last_outcome

    @property
    def disabled(self) -> bool:
        return self._disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        self._disabled = bool(value)

    def add_listener(self, callback: Callable[[WheelPhase, WheelPhase], None]) -> None:
        """Observe phase changes as ``(old_phase, new_phase)``."""
        self._phases.add_listener(callback)

    def remove_listener(self, callback: Callable[[WheelPhase, WheelPhase], None]) -> None:
        self._phases.remove_listener(callback)

    # ------------------------------------------------------------------
    # Spin
    # ------------------------------------------------------------------

    def spin(self) -> Optional[SpinOutcome]:
        """Request a spin.

        Returns:
            The committed outcome, or None if the request was ignored
            because the wheel is disabled or already spinning
        """
        if self._disabled or not self._phases.ready:
            reason = "disabled" if self._disabled else "already spinning"
            logger.debug(f"Spin ignored: {reason}")
            self._emit(EventType.SPIN_REJECTED, {"reason": reason})
            return None

        r = self._rng.random()
        index = draw_index(self._segments, r)
        count = len(self._segments)
        angle = target_angle(index, count)
        turns = full_turns(self._rng, self._min_turns, self._extra_turns)

        start = self._rotation
        outcome = SpinOutcome(
            segment=self._segments[index],
            index=index,
            draw=r,
            target_angle=angle,
            full_turns=turns,
            start_rotation=start,
            end_rotation=start + turns + angle,
        )

        # Schedule first: if this raises, the wheel keeps its previous phase
        self._scheduler.call_later(self._settle_ms, lambda: self._settle(outcome))

        self._rotation = outcome.end_rotation
        self._last_outcome = outcome
        self._phases.transition(WheelPhase.SPINNING)
        logger.info(
            f"Spin accepted: r={r:.4f} -> {outcome.segment.label} "
            f"(slot {index}, rotation {start:.1f} -> {self._rotation:.1f})"
        )
        self._emit(EventType.SPIN_STARTED, {"outcome": outcome, "duration_ms": self._settle_ms})
        return outcome

    def _settle(self, outcome: SpinOutcome) -> None:
        self._phases.transition(WheelPhase.SETTLED)
        logger.info(f"Spin settled on {outcome.segment.label} (value {outcome.segment.value})")
        self._emit(EventType.SPIN_SETTLED, {"outcome": outcome})

        if self.on_spin is not None:
            try:
                self.on_spin(outcome.segment)
            except Exception as e:
                logger.error(f"Error in spin callback: {e}")

    def _on_phase_changed(self, old: WheelPhase, new: WheelPhase) -> None:
        self._emit(EventType.PHASE_CHANGED, {"from": old, "to": new, "rotation": self._rotation})

    def _emit(self, event_type: EventType, data: dict) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(Event(event_type, data=data, source="wheel"))
