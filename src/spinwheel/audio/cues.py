"""
Sound cues for the wheel.

Cues are names, not audio. A sink decides what to do with them: the default
one logs, ``MixerSink`` plays synthesised sounds through pygame.
"""

from enum import Enum
from typing import Callable, Optional
import logging

from spinwheel.core.events import Event, EventBus, EventType
from spinwheel.wheel.scheduler import Scheduler

logger = logging.getLogger(__name__)


class SoundCue(Enum):
    WHEEL_SPIN = "wheel_spin"
    SPIN_STOP = "spin_stop"
    SMALL_WIN = "small_win"
    BIG_WIN = "big_win"
    JACKPOT = "jackpot"
    CELEBRATION = "celebration"
    COIN_DROP = "coin_drop"
    BUTTON_CLICK = "button_click"


JACKPOT_THRESHOLD = 1000
BIG_WIN_THRESHOLD = 100

CueSink = Callable[[SoundCue, float], None]


def win_sequence(value: float) -> list[tuple[SoundCue, int]]:
    """Cue sequence for a payout as ``(cue, delay_ms)`` pairs."""
    if value >= JACKPOT_THRESHOLD:
        return [
            (SoundCue.JACKPOT, 0),
            (SoundCue.CELEBRATION, 500),
            (SoundCue.COIN_DROP, 1000),
            (SoundCue.COIN_DROP, 1200),
            (SoundCue.COIN_DROP, 1400),
        ]
    if value >= BIG_WIN_THRESHOLD:
        return [
            (SoundCue.BIG_WIN, 0),
            (SoundCue.COIN_DROP, 500),
            (SoundCue.COIN_DROP, 700),
        ]
    return [
        (SoundCue.SMALL_WIN, 0),
        (SoundCue.COIN_DROP, 300),
    ]


def log_sink(cue: SoundCue, volume: float) -> None:
    logger.info(f"Sound: {cue.value} (volume {round(volume * 100)}%)")


class CuePlayer:
    """Plays cues in response to wheel events.

    Spin start plays WHEEL_SPIN, settle plays SPIN_STOP followed by the
    payout's win sequence. Delayed cues go through the scheduler.
    """

    def __init__(
        self,
        event_bus: EventBus,
        scheduler: Scheduler,
        sink: Optional[CueSink] = None,
        volume: float = 0.7,
        enabled: bool = True,
    ) -> None:
        self._scheduler = scheduler
        self._sink = sink or log_sink
        self._pending = 0
        self.volume = volume
        self.enabled = enabled
        event_bus.subscribe(EventType.SPIN_STARTED, self._on_spin_started)
        event_bus.subscribe(EventType.SPIN_SETTLED, self._on_spin_settled)

    @property
    def pending(self) -> int:
        """Delayed cues scheduled but not played yet."""
        return self._pending

    def play(self, cue: SoundCue, delay_ms: float = 0) -> None:
        if not self.enabled:
            return
        if delay_ms > 0:
            self._pending += 1
            self._scheduler.call_later(delay_ms, lambda: self._play_delayed(cue))
        else:
            self._play_now(cue)

    def play_sequence(self, cues: list[tuple[SoundCue, int]]) -> None:
        for cue, delay_ms in cues:
            self.play(cue, delay_ms)

    def _play_delayed(self, cue: SoundCue) -> None:
        self._pending -= 1
        self._play_now(cue)

    def _play_now(self, cue: SoundCue) -> None:
        try:
            self._sink(cue, self.volume)
        except Exception as e:
            logger.error(f"Error in sound sink: {e}")

    def _on_spin_started(self, event: Event) -> None:
        self.play(SoundCue.WHEEL_SPIN)

    def _on_spin_settled(self, event: Event) -> None:
        outcome = event.data["outcome"]
        self.play(SoundCue.SPIN_STOP)
        self.play_sequence(win_sequence(outcome.segment.value))
