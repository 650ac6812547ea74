"""RGB colours built from checked integer triples."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

_CHANNELS = 3
_MAX_CHANNEL = 255


@dataclass(frozen=True)
class Color:
    """A colour with red, green and blue channels in 0..=255."""

    red: int
    green: int
    blue: int


class IntoColorError(ValueError):
    """Values could not become a colour."""

    class Kind(enum.Enum):
        BAD_LEN = "incorrect number of values"
        INT_CONVERSION = "value out of the 0..=255 range"

    def __init__(self, kind: IntoColorError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntoColorError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


def color_from(values: Sequence[int]) -> Color:
    """Build a colour from exactly three integers in 0..=255."""
    if len(values) != _CHANNELS:
        raise IntoColorError(IntoColorError.Kind.BAD_LEN)
    if any(not 0 <= value <= _MAX_CHANNEL for value in values):
        raise IntoColorError(IntoColorError.Kind.INT_CONVERSION)
    red, green, blue = values
    return Color(red=red, green=green, blue=blue)