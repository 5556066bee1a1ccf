"""Exceptions raised by the animation core."""

from __future__ import annotations

from pathlib import Path


class AnimationError(Exception):
    """Base class for animation document errors."""


class AnimationIOError(AnimationError):
    """Raised when an animation file cannot be read or written."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class NoBoundPathError(AnimationError):
    """Raised by save() when the document is not bound to a file."""


class MalformedLineError(AnimationError):
    """Raised when a data line contains a token that is not a byte value."""


class EmptyAnimationError(AnimationError):
    """Raised when a file yields no frames; the previous document is kept."""


class LastFrameError(AnimationError):
    """Raised when removing the only frame of a document."""


__all__ = [
    "AnimationError",
    "AnimationIOError",
    "EmptyAnimationError",
    "LastFrameError",
    "MalformedLineError",
    "NoBoundPathError",
]
