"""Single 5x5 LED matrix frame."""

from __future__ import annotations

from typing import Iterable

MATRIX_SIZE = 5
LED_COUNT = MATRIX_SIZE * MATRIX_SIZE
MAX_BRIGHTNESS = 255
BYTE_DIRECTIVE = ".byte"


def _check_value(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"LED value must be an int, got {value!r}")
    if not 0 <= value <= MAX_BRIGHTNESS:
        raise ValueError(f"LED value must be between 0 and {MAX_BRIGHTNESS}, got {value}")
    return value


class Frame:
    """Brightness values for the 25 LEDs of the matrix.

    Index ``i`` addresses the LED at row ``i % 5`` and column ``i // 5``.
    Values only change through the editing methods, so every frame stays
    encodable.
    """

    def __init__(self, leds: Iterable[int] | None = None) -> None:
        if leds is None:
            values = [MAX_BRIGHTNESS] * LED_COUNT
        else:
            values = [_check_value(value) for value in leds]
        if len(values) != LED_COUNT:
            raise ValueError(f"A frame holds exactly {LED_COUNT} values, got {len(values)}")
        self._leds = values

    @classmethod
    def with_values(cls, values: Iterable[int]) -> Frame:
        """Build a frame from exactly 25 brightness values."""
        return cls(values)

    @property
    def leds(self) -> tuple[int, ...]:
        return tuple(self._leds)

    def copy(self) -> Frame:
        return Frame(self._leds)

    def invert(self) -> None:
        self._leds = [MAX_BRIGHTNESS - value for value in self._leds]

    def set_row(self, row: int, value: int) -> None:
        """Set every LED in ``row``; rows outside 0-4 match nothing."""
        _check_value(value)
        for i in range(LED_COUNT):
            if i % MATRIX_SIZE == row:
                self._leds[i] = value

    def set_col(self, col: int, value: int) -> None:
        """Set every LED in ``col``; columns outside 0-4 match nothing."""
        _check_value(value)
        for i in range(LED_COUNT):
            if i // MATRIX_SIZE == col:
                self._leds[i] = value

    def set_all(self, value: int) -> None:
        self._leds = [_check_value(value)] * LED_COUNT

    def get_led(self, row: int, col: int) -> int:
        return self._leds[_led_index(row, col)]

    def set_led(self, row: int, col: int, value: int) -> None:
        self._leds[_led_index(row, col)] = _check_value(value)

    def to_line(self) -> str:
        """Encode as a ``.byte`` line of 25 comma-separated decimal values."""
        return f"{BYTE_DIRECTIVE} " + ",".join(str(value) for value in self._leds)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Frame):
            return self._leds == other._leds
        return NotImplemented

    def __repr__(self) -> str:
        return f"Frame(leds={self._leds!r})"

    def __str__(self) -> str:
        return self.to_line()


def _led_index(row: int, col: int) -> int:
    if not (0 <= row < MATRIX_SIZE and 0 <= col < MATRIX_SIZE):
        raise IndexError(f"LED ({row}, {col}) is outside the {MATRIX_SIZE}x{MATRIX_SIZE} matrix")
    return col * MATRIX_SIZE + row


__all__ = ["BYTE_DIRECTIVE", "Frame", "LED_COUNT", "MATRIX_SIZE", "MAX_BRIGHTNESS"]
