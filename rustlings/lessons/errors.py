"""Optional values, integer parsing and validated positive integers."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_I32_BITS = 32
_I64_BITS = 64
_U16_MAX = 0xFFFF


def _parse_int(text: str, bits: int) -> int:
    """Parse a signed integer of the given width, rejecting anything but ASCII digits."""
    if not text:
        raise ValueError("cannot parse integer from empty string")
    sign, digits = 1, text
    if text[0] in "+-":
        if len(text) == 1:
            raise ValueError("invalid digit found in string")
        sign = -1 if text[0] == "-" else 1
        digits = text[1:]
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    value = 0
    for char in digits:
        if not "0" <= char <= "9":
            raise ValueError("invalid digit found in string")
        value = value * 10 + sign * (ord(char) - ord("0"))
        if value > high:
            raise ValueError("number too large to fit in target type")
        if value < low:
            raise ValueError("number too small to fit in target type")
    return value


def maybe_icecream(time_of_day: int) -> int | None:
    """Pieces of ice cream left at a given hour; None for hours past 23."""
    if not 0 <= time_of_day <= _U16_MAX:
        raise ValueError(f"time of day out of range: {time_of_day}")
    if time_of_day > 23:
        return None
    return 5 if time_of_day < 22 else 0


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; the name must not be empty."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Cost of buying a typed-in quantity of items at 5 tokens each plus a fee of 1."""
    processing_fee = 1
    cost_per_item = 5
    qty = _parse_int(item_quantity, _I32_BITS)
    cost = qty * cost_per_item + processing_fee
    if not -(1 << 31) <= cost < (1 << 31):
        raise OverflowError("attempt to compute total cost with overflow")
    return cost


class CreationError(ValueError):
    """A value could not become a positive non-zero integer."""

    class Kind(enum.Enum):
        NEGATIVE = "number is negative"
        ZERO = "number is zero"

    def __init__(self, kind: CreationError.Kind) -> None:
        super().__init__(kind.value)
        self.kind = kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CreationError):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash(self.kind)


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise CreationError(CreationError.Kind.NEGATIVE)
        if self.value == 0:
            raise CreationError(CreationError.Kind.ZERO)


class ParsePosNonzeroError(ValueError):
    """Text did not parse as an integer, or the integer was not positive."""

    def __init__(self, error: ValueError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def is_creation(self) -> bool:
        """True when the number parsed but was zero or negative."""
        return isinstance(self.error, CreationError)


def parse_pos_nonzero(text: str) -> PositiveNonzeroInteger:
    """Parse text into a positive non-zero integer."""
    try:
        number = _parse_int(text, _I64_BITS)
    except ValueError as error:
        raise ParsePosNonzeroError(error) from error
    try:
        return PositiveNonzeroInteger(number)
    except CreationError as error:
        raise ParsePosNonzeroError(error) from error