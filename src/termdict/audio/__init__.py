"""
Pronunciation audio: playback plans and the sequential playback state machine.
"""

from termdict.audio.sequencer import (
    PlaybackMachine,
    PlaybackPlan,
    PlaybackReport,
    PlaybackState,
    build_plan,
    play,
)

__all__ = [
    "PlaybackMachine",
    "PlaybackPlan",
    "PlaybackReport",
    "PlaybackState",
    "build_plan",
    "play",
]
