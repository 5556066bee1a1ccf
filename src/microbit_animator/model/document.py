"""Animation document: an ordered, non-empty list of frames bound to a file."""

from __future__ import annotations

import contextlib
import logging
import os
from pathlib import Path
import stat
import tempfile
from typing import Iterable, Iterator

from microbit_animator.errors import (
    AnimationIOError,
    EmptyAnimationError,
    LastFrameError,
    NoBoundPathError,
)
from microbit_animator.model.codec import decode_lines, encode_frames
from microbit_animator.model.frame import Frame

DEFAULT_FRAME_COUNT = 5

logger = logging.getLogger(__name__)


class AnimationDocument:
    """Frames in playback order, the selected frame and the backing file.

    The document always holds at least one frame and its selection always
    points at an existing frame.
    """

    def __init__(
        self,
        frames: Iterable[Frame] | None = None,
        path: str | Path | None = None,
    ) -> None:
        if frames is None:
            frames = [Frame() for _ in range(DEFAULT_FRAME_COUNT)]
        self._frames = list(frames)
        if not self._frames:
            raise ValueError("An animation needs at least one frame")
        self._path = Path(path) if path is not None else None
        self._selected = 0

    @classmethod
    def blank(cls, frame_count: int = DEFAULT_FRAME_COUNT) -> AnimationDocument:
        """Create an unbound document of fully lit frames."""
        if frame_count < 1:
            raise ValueError(f"frame_count must be at least 1, got {frame_count}")
        return cls([Frame() for _ in range(frame_count)])

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._frames)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def selected_index(self) -> int:
        return self._selected

    @selected_index.setter
    def selected_index(self, index: int) -> None:
        self._selected = self._check_index(index)

    @property
    def selected_frame(self) -> Frame:
        return self._frames[self._selected]

    def select(self, index: int) -> Frame:
        self.selected_index = index
        return self.selected_frame

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def __getitem__(self, index: int) -> Frame:
        return self._frames[self._check_index(index)]

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._frames):
            raise IndexError(f"Frame index {index} out of range for {len(self._frames)} frames")
        return index

    # Sequence editing

    def insert_after(self, index: int) -> Frame:
        """Duplicate the frame at ``index`` right after it and select the copy."""
        self._check_index(index)
        duplicate = self._frames[index].copy()
        self._frames.insert(index + 1, duplicate)
        self._selected = index + 1
        return duplicate

    def remove(self, index: int) -> Frame:
        """Remove the frame at ``index``; the last remaining frame cannot be removed."""
        self._check_index(index)
        if len(self._frames) == 1:
            raise LastFrameError("Cannot remove the only frame of an animation")
        removed = self._frames.pop(index)
        self._selected = min(index, len(self._frames) - 1)
        return removed

    def swap(self, first: int, second: int) -> None:
        """Exchange two frames; a selected frame keeps its selection."""
        self._check_index(first)
        self._check_index(second)
        frames = self._frames
        frames[first], frames[second] = frames[second], frames[first]
        if self._selected == first:
            self._selected = second
        elif self._selected == second:
            self._selected = first

    def move_up(self, index: int) -> None:
        self._check_index(index)
        if index > 0:
            self.swap(index, index - 1)

    def move_down(self, index: int) -> None:
        self._check_index(index)
        if index < len(self._frames) - 1:
            self.swap(index, index + 1)

    # Persistence

    def to_text(self) -> str:
        return encode_frames(self._frames)

    def load(self, path: str | Path) -> int:
        """Replace all frames with those read from ``path``.

        Malformed lines are skipped. Returns the number of skipped lines. On
        failure the document is left untouched.
        """
        source = Path(path)
        logger.info("Loading animation from %s", source)
        try:
            with open(source, "r", encoding="utf-8", errors="replace") as handle:
                result = decode_lines(handle)
        except OSError as exc:
            logger.error("Failed to read animation %s: %s", source, exc)
            raise AnimationIOError(f"Could not read animation file {source}: {exc}", source) from exc

        if result.skipped_lines:
            logger.warning("Skipped %d malformed line(s) in %s", result.skipped_lines, source)
        if not result.frames:
            raise EmptyAnimationError(f"No frames found in {source}")

        self._frames = result.frames
        self._path = source
        self._selected = min(self._selected, len(self._frames) - 1)
        logger.info("Loaded %d frame(s) from %s", len(self._frames), source)
        return result.skipped_lines

    def save(self) -> Path:
        """Write to the bound file."""
        if self._path is None:
            raise NoBoundPathError("Animation is not bound to a file; use save_as()")
        return self._write(self._path)

    def save_as(self, path: str | Path) -> Path:
        """Write to ``path`` and bind the document to it."""
        target = self._write(Path(path))
        self._path = target
        return target

    def _write(self, target: Path) -> Path:
        try:
            _write_atomic(target, self.to_text())
        except OSError as exc:
            logger.error("Failed to write animation %s: %s", target, exc)
            raise AnimationIOError(f"Could not write animation file {target}: {exc}", target) from exc
        logger.info("Saved %d frame(s) to %s", len(self._frames), target)
        return target


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        os.chmod(temp_name, _target_mode(path))
        os.replace(temp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(temp_name)
        raise


def _target_mode(path: Path) -> int:
    """Mode for the replacement file: the existing file's, else the umask default."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


__all__ = ["AnimationDocument", "DEFAULT_FRAME_COUNT"]
