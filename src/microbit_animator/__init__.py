"""Animation model, file format and playback for a 5x5 LED matrix."""

from microbit_animator.errors import (
    AnimationError,
    AnimationIOError,
    EmptyAnimationError,
    LastFrameError,
    MalformedLineError,
    NoBoundPathError,
)
from microbit_animator.model import AnimationDocument, Frame
from microbit_animator.playback import PlaybackClock

__all__ = [
    "AnimationDocument",
    "AnimationError",
    "AnimationIOError",
    "EmptyAnimationError",
    "Frame",
    "LastFrameError",
    "MalformedLineError",
    "NoBoundPathError",
    "PlaybackClock",
]
