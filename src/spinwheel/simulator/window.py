"""
Desktop wheel simulator using pygame.

Keyboard Mapping:
    SPACE / ENTER: Spin
    X: Toggle disabled
    D: Toggle debug overlay
    ESC / Q: Exit
"""

import asyncio
import logging
import math
import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pygame

from ..audio.cues import CuePlayer
from ..audio.mixer import MixerSink
from ..animation.spin import WheelAnimator
from ..core.events import EventBus, EventType, spin_request_event, tick_event
from ..graphics.wheel_renderer import render_wheel, slot_geometry
from ..wheel.reward_wheel import RewardWheel
from ..wheel.scheduler import FrameScheduler
from ..wheel.segments import Segment
from ..settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 480
    height: int = 560
    title: str = "Reward Wheel"
    fps: int = 60
    wheel_size: int = 300

    bg_color: tuple[int, int, int] = (20, 20, 30)
    text_color: tuple[int, int, int] = (200, 200, 220)
    accent_color: tuple[int, int, int] = (255, 215, 0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.display.window_width,
            height=settings.display.window_height,
            fps=settings.display.fps,
            wheel_size=settings.wheel.size,
            bg_color=settings.display.bg_color,
        )


class SimulatorWindow:
    """Pygame front end for a RewardWheel.

    Time is driven by the frame clock: every frame emits a TICK on the bus
    and advances the frame scheduler that settles spins. Key presses queue
    SPIN_REQUESTED events, which are dispatched once per frame.
    """

    def __init__(
        self,
        segments: Sequence[Segment] | None = None,
        config: WindowConfig | None = None,
        settings: Settings | None = None,
        seed: int | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.config = config or WindowConfig.from_settings(self.settings)
        self.event_bus = EventBus()
        self.scheduler = FrameScheduler()

        self.wheel = RewardWheel.from_settings(
            self.settings.wheel,
            segments,
            on_spin=self._on_result,
            rng=random.Random(seed),
            scheduler=self.scheduler,
            event_bus=self.event_bus,
            size=self.config.wheel_size,
        )
        self.animator = WheelAnimator(self.event_bus)
        self.mixer = MixerSink()
        self.cues = CuePlayer(self.event_bus, self.scheduler, sink=self.mixer)
        self.event_bus.subscribe(EventType.SPIN_REQUESTED, lambda e: self.wheel.spin())

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._last_result: Segment | None = None
        self._buffer = np.zeros((self.config.wheel_size, self.config.wheel_size, 3), dtype=np.uint8)
        self._geometry = slot_geometry(len(self.wheel.segments), self.config.wheel_size / 2)

        logger.info("SimulatorWindow created")

    def _on_result(self, segment: Segment) -> None:
        self._last_result = segment
        logger.info(f"Won {segment.label}")

    def _init_pygame(self) -> None:
        """Initialize pygame, audio and the window."""
        if not self.mixer.init():
            logger.warning("Audio unavailable, sound cues will only be logged")
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode((self.config.width, self.config.height))
        self._clock = pygame.time.Clock()
        self._font = pygame.font.Font(None, 32)
        self._small_font = pygame.font.Font(None, 22)

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.queue_event(spin_request_event("keyboard"))
        elif key == pygame.K_x:
            self.wheel.disabled = not self.wheel.disabled
            logger.info(f"Wheel disabled: {self.wheel.disabled}")
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug

    def _render(self) -> None:
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)
        rotation = self.animator.rotation

        render_wheel(self._buffer, self.wheel.segments, rotation)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        left = (self.config.width - self.config.wheel_size) // 2
        top = 40
        self._screen.blit(surface, (left, top))
        self._render_labels(left, top, rotation)

        if self.wheel.is_spinning:
            status = "Spinning..."
        elif self.wheel.disabled:
            status = "Wheel disabled"
        elif self._last_result is not None:
            status = f"You won {self._last_result.label}!"
        else:
            status = "Press SPACE to spin"
        self._blit_centered(status, self._font, self.config.accent_color,
                            top + self.config.wheel_size + 50)

        if self._show_debug:
            fps = self._clock.get_fps() if self._clock else 0.0
            lines = [
                f"FPS: {fps:.1f}",
                f"Phase: {self.wheel.phase.name}",
                f"Rotation: {rotation:.1f}",
                f"Timers: {self.scheduler.pending}",
            ]
            for i, line in enumerate(lines):
                text = self._small_font.render(line, True, self.config.text_color)
                self._screen.blit(text, (8, 8 + i * 18))

        pygame.display.flip()

    def _render_labels(self, left: int, top: int, rotation: float) -> None:
        radius = self.config.wheel_size / 2
        rad = math.radians(rotation)
        cos_r, sin_r = math.cos(rad), math.sin(rad)
        for slot, segment in zip(self._geometry, self.wheel.segments):
            dx = slot.label_anchor[0] - radius
            dy = slot.label_anchor[1] - radius
            x = radius + dx * cos_r - dy * sin_r
            y = radius + dx * sin_r + dy * cos_r
            text = self._small_font.render(segment.label, True, (255, 255, 255))
            text = pygame.transform.rotate(text, -(slot.label_angle + rotation))
            rect = text.get_rect(center=(left + x, top + y))
            self._screen.blit(text, rect)

    def _blit_centered(self, message: str, font: pygame.font.Font, color, y: int) -> None:
        text = font.render(message, True, color)
        self._screen.blit(text, text.get_rect(center=(self.config.width // 2, y)))

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True
        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            delta_ms = float(self._clock.get_time()) if self._clock else 0.0
            self.event_bus.emit(tick_event(delta_ms, self._frame_count))
            self.scheduler.tick(delta_ms)

            await self.event_bus.process_queue()
            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        self.mixer.cleanup()
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        self._running = False
