"""Frame-sequence playback."""

from microbit_animator.playback.clock import RUNNING, STOPPED, PlaybackClock

__all__ = ["PlaybackClock", "RUNNING", "STOPPED"]
