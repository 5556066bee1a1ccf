"""Text encoding of frame sequences as assembler ``.byte`` directives.

A file holds one ``.byte`` data line per frame, each followed by a separator
line: ``.byte 1`` while more frames follow and ``.byte 0`` after the last one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from microbit_animator.errors import MalformedLineError
from microbit_animator.model.frame import BYTE_DIRECTIVE, LED_COUNT, MAX_BRIGHTNESS, Frame

SEPARATOR_MORE = f"{BYTE_DIRECTIVE} 1"
SEPARATOR_END = f"{BYTE_DIRECTIVE} 0"


@dataclass(frozen=True)
class DecodeResult:
    """Frames recovered from a file and how many data lines were dropped."""

    frames: list[Frame]
    skipped_lines: int


def encode_frames(frames: Sequence[Frame]) -> str:
    """Encode frames in order; every line, including the last, ends with a newline."""
    lines: list[str] = []
    for index, frame in enumerate(frames):
        lines.append(frame.to_line())
        lines.append(SEPARATOR_END if index == len(frames) - 1 else SEPARATOR_MORE)
    return "".join(f"{line}\n" for line in lines)


def is_separator(line: str) -> bool:
    return line.strip() in (SEPARATOR_MORE, SEPARATOR_END)


def _parse_byte(token: str) -> int:
    digits = token[1:] if token.startswith("+") else token
    if not (digits.isascii() and digits.isdigit()):
        raise MalformedLineError(f"Not a byte value: {token!r}")
    value = int(digits)
    if value > MAX_BRIGHTNESS:
        raise MalformedLineError(f"Byte value out of range: {token!r}")
    return value


def parse_data_line(line: str) -> Frame | None:
    """Parse one data line into a frame.

    The last whitespace-delimited token holds the comma-separated values.
    Missing values are 0 and values past the 25th are ignored. Returns None
    for a line with no tokens and raises MalformedLineError if any value is
    not an unsigned 8-bit integer.
    """
    tokens = line.split()
    if not tokens:
        return None
    values = [_parse_byte(token) for token in tokens[-1].split(",")]
    leds = [0] * LED_COUNT
    for index, value in enumerate(values[:LED_COUNT]):
        leds[index] = value
    return Frame(leds)


def decode_lines(lines: Iterable[str]) -> DecodeResult:
    """Decode frames from text lines, skipping separators and malformed lines."""
    frames: list[Frame] = []
    skipped = 0
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if is_separator(line):
            continue
        try:
            frame = parse_data_line(line)
        except MalformedLineError:
            skipped += 1
            continue
        if frame is not None:
            frames.append(frame)
    return DecodeResult(frames=frames, skipped_lines=skipped)


def decode_text(text: str) -> DecodeResult:
    return decode_lines(text.splitlines())


__all__ = [
    "DecodeResult",
    "SEPARATOR_END",
    "SEPARATOR_MORE",
    "decode_lines",
    "decode_text",
    "encode_frames",
    "is_separator",
    "parse_data_line",
]
