"""
pygame mixer output for sound cues.

Every cue is synthesised once at init from simple oscillators with linear
envelopes, then played through pygame.mixer. No audio files are needed.
"""

import array
import logging
import math
import random
from typing import Callable, Dict

import pygame

from .cues import SoundCue, log_sink

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


# ===== CUE SAMPLES =====

def gen_button_click() -> array.array:
    """Arcade button click."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * 0.06)):
        t = i / SAMPLE_RATE
        env = max(0, 1 - t * 20)
        val = square(t, 800) * 0.4 + sine(t, 150) * 0.3
        samples.append(int(val * env * 32767 * 0.6))
    return samples


def gen_wheel_spin() -> array.array:
    """Ratchet clicks that speed up, then slow down as the wheel coasts."""
    samples = array.array('h')
    duration = 2.0
    click_t = 0.0
    last_click = 0.0
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        if t >= click_t:
            last_click = click_t
            # Fastest clicking a third of the way in
            click_t += 0.02 + 0.08 * abs(t / duration - 0.33)
        phase = t - last_click
        val = noise() * 0.25 * (1 - phase * 70) if phase < 0.012 else 0
        samples.append(int(val * 32767))
    return samples


def gen_spin_stop() -> array.array:
    """Wheel stop reveal."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * 0.6)):
        t = i / SAMPLE_RATE
        env = max(0, 1 - t * 1.7)
        val = (sine(t, 261) + sine(t, 329) + sine(t, 392)) * 0.15
        val += noise() * 0.1 * max(0, 1 - t * 10)
        samples.append(int(val * env * 32767))
    return samples


def gen_small_win() -> array.array:
    """Two-note ding."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * 0.3)):
        t = i / SAMPLE_RATE
        freq = 784 if t < 0.1 else 1047
        env = max(0, 1 - (t if t < 0.1 else t - 0.1) * 5)
        val = sine(t, freq) * 0.4 + square(t, freq) * 0.1
        samples.append(int(val * env * 32767))
    return samples


def gen_big_win() -> array.array:
    """Triumphant arpeggio."""
    samples = array.array('h')
    notes = [523, 659, 784, 1047]
    for i in range(int(SAMPLE_RATE * 0.5)):
        t = i / SAMPLE_RATE
        note_idx = min(int(t * 10), 3)
        env = max(0, 1 - (t - note_idx * 0.1) * 5)
        val = square(t, notes[note_idx]) * 0.25
        samples.append(int(val * env * 32767))
    return samples


def gen_jackpot() -> array.array:
    """Jackpot alarm."""
    samples = array.array('h')
    notes = [523, 659, 784, 1047, 784, 659, 523, 659, 784, 1047, 1319]
    for i in range(int(SAMPLE_RATE * 1.0)):
        t = i / SAMPLE_RATE
        note_idx = min(int(t * 15), len(notes) - 1)
        val = square(t, notes[note_idx]) * 0.2
        if int(t * 5) % 2 == 0:
            val += sine(t, 65) * 0.2
        samples.append(int(val * max(0, 1 - t) * 32767))
    return samples


def gen_celebration() -> array.array:
    """Rising sweep over a major chord."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * 0.8)):
        t = i / SAMPLE_RATE
        env = max(0, 1 - t * 1.25)
        val = (square(t, 523) + square(t, 659) + square(t, 784)) * 0.1
        val += sine(t, 400 + t * 1200) * 0.2
        samples.append(int(val * env * 32767))
    return samples


def gen_coin_drop() -> array.array:
    """Short metallic clink."""
    samples = array.array('h')
    for i in range(int(SAMPLE_RATE * 0.15)):
        t = i / SAMPLE_RATE
        env = max(0, 1 - t * 7)
        val = sine(t, 2093) * 0.3 + sine(t, 2637) * 0.2
        val += noise() * 0.1 * max(0, 1 - t * 60)
        samples.append(int(val * env * 32767))
    return samples


CUE_GENERATORS: Dict[SoundCue, Callable[[], array.array]] = {
    SoundCue.BUTTON_CLICK: gen_button_click,
    SoundCue.WHEEL_SPIN: gen_wheel_spin,
    SoundCue.SPIN_STOP: gen_spin_stop,
    SoundCue.SMALL_WIN: gen_small_win,
    SoundCue.BIG_WIN: gen_big_win,
    SoundCue.JACKPOT: gen_jackpot,
    SoundCue.CELEBRATION: gen_celebration,
    SoundCue.COIN_DROP: gen_coin_drop,
}


class MixerSink:
    """
    Cue sink that plays synthesised sounds through pygame.mixer.

    Until ``init`` succeeds, cues are logged instead of played.
    """

    def __init__(self, master_volume: float = 1.0) -> None:
        self.master_volume = master_volume
        self._initialized = False
        self._sounds: Dict[SoundCue, pygame.mixer.Sound] = {}

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Open the mixer and generate every cue. Returns False if audio is unavailable."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 4096)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(16)
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

        self._initialized = True
        for cue, generate in CUE_GENERATORS.items():
            self._sounds[cue] = self._create_sound(generate())
        logger.info(f"Audio initialized with {len(self._sounds)} cues")
        return True

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (duplicated to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def __call__(self, cue: SoundCue, volume: float) -> None:
        if not self._initialized:
            log_sink(cue, volume)
            return

        sound = self._sounds.get(cue)
        if sound is None:
            logger.warning(f"Sound not found: {cue.value}")
            return

        sound.set_volume(volume * self.master_volume)
        sound.play()

    def cleanup(self) -> None:
        """Close the mixer."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._sounds.clear()
            logger.info("Audio cleaned up")
