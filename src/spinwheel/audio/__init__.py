"""
spinwheel sound cues.
"""

from .cues import CuePlayer, SoundCue, log_sink, win_sequence
from .mixer import MixerSink

__all__ = ["CuePlayer", "SoundCue", "log_sink", "win_sequence", "MixerSink"]
