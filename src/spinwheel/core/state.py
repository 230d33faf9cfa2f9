"""
Phase machine for the reward wheel spin lifecycle.

Phases:
    IDLE: Wheel at rest, never spun
    SPINNING: A spin has been accepted and is animating
    SETTLED: Last spin finished and its outcome was delivered

SETTLED accepts a new spin exactly like IDLE. There is no terminal phase.
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class WheelPhase(Enum):
    """Spin lifecycle phases."""
    IDLE = auto()
    SPINNING = auto()
    SETTLED = auto()


PhaseListener = Callable[["WheelPhase", "WheelPhase"], None]


class PhaseMachine:
    """
    Tracks the wheel phase and refuses transitions outside the table.

    Listeners are notified after every accepted transition with
    ``(old_phase, new_phase)``. A failing listener is logged and skipped.
    """

    VALID_TRANSITIONS: list[tuple[WheelPhase, WheelPhase]] = [
        (WheelPhase.IDLE, WheelPhase.SPINNING),
        (WheelPhase.SPINNING, WheelPhase.SETTLED),
        (WheelPhase.SETTLED, WheelPhase.SPINNING),
    ]

    # Phases from which a new spin may start
    SPIN_READY = frozenset({WheelPhase.IDLE, WheelPhase.SETTLED})

    def __init__(self, initial_phase: WheelPhase = WheelPhase.IDLE) -> None:
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> WheelPhase:
        """Get current phase."""
        return self._phase

    @property
    def ready(self) -> bool:
        """True when a new spin may be accepted."""
        return self._phase in self.SPIN_READY

    def can_transition(self, to_phase: WheelPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: WheelPhase) -> bool:
        """
        Attempt to move to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition happened, False if it was refused
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid phase transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.debug(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in list(self._listeners):
            try:
                listener(old_phase, to_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)
