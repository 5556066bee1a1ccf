"""Poll-driven playback clock that steps through an animation's frames."""

from __future__ import annotations

import logging
import time

from microbit_animator.model.document import AnimationDocument

MIN_FPS = 1
MAX_FPS = 15
DEFAULT_FPS = 3

STOPPED = "STOPPED"
RUNNING = "RUNNING"

# Absorbs rounding in timestamps taken at exact multiples of the interval.
_TIMING_TOLERANCE_SECONDS = 1e-9

logger = logging.getLogger(__name__)


class PlaybackClock:
    """Advance a document's selected frame at a fixed rate.

    There is no background thread: the owner calls ``tick()`` from its own
    loop. A tick advances at most one frame, so a late poll slows playback
    down instead of skipping frames.
    """

    def __init__(self, document: AnimationDocument, frames_per_second: int = DEFAULT_FPS) -> None:
        self._document = document
        self._fps = _check_fps(frames_per_second)
        self._running = False
        self._last_advance = 0.0

    @property
    def document(self) -> AnimationDocument:
        return self._document

    @property
    def frames_per_second(self) -> int:
        return self._fps

    @frames_per_second.setter
    def frames_per_second(self, value: int) -> None:
        self._fps = _check_fps(value)

    @property
    def interval_seconds(self) -> float:
        return 1.0 / self._fps

    @property
    def running(self) -> bool:
        return self._running

    @property
    def state(self) -> str:
        return RUNNING if self._running else STOPPED

    @property
    def last_advance_timestamp(self) -> float:
        return self._last_advance

    @property
    def current_index(self) -> int:
        return self._document.selected_index

    def start(self, now: float | None = None) -> None:
        """Start playback from the current frame."""
        if self._running:
            return
        self._running = True
        self._last_advance = time.monotonic() if now is None else now
        logger.debug("Playback started at frame %d, %d fps", self.current_index, self._fps)

    def stop(self) -> None:
        if self._running:
            logger.debug("Playback stopped at frame %d", self.current_index)
        self._running = False

    def toggle(self, now: float | None = None) -> bool:
        """Flip between playing and paused; returns the new running state."""
        if self._running:
            self.stop()
        else:
            self.start(now)
        return self._running

    def tick(self, now: float | None = None) -> int | None:
        """Advance one frame if a full interval has passed; return the new index."""
        if not self._running:
            return None
        if now is None:
            now = time.monotonic()
        elapsed = now - self._last_advance
        if elapsed + _TIMING_TOLERANCE_SECONDS < self.interval_seconds:
            return None

        document = self._document
        document.selected_index = (document.selected_index + 1) % len(document)
        self._last_advance = now
        logger.debug("Advanced to frame %d", document.selected_index)
        return document.selected_index


def _check_fps(value: int) -> int:
    if not MIN_FPS <= value <= MAX_FPS:
        raise ValueError(f"frames_per_second must be between {MIN_FPS} and {MAX_FPS}, got {value}")
    return value


__all__ = ["DEFAULT_FPS", "MAX_FPS", "MIN_FPS", "PlaybackClock", "RUNNING", "STOPPED"]
