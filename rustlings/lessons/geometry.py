"""Parity checks and rectangles with positive sides."""

from __future__ import annotations

from dataclasses import dataclass


def is_even(num: int) -> bool:
    """True when num is divisible by two."""
    return num % 2 == 0


@dataclass(frozen=True)
class Rectangle:
    """A rectangle whose width and height are both positive."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Rectangle width and height cannot be negative!")