"""String transformations and simple list mapping."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class Uppercase:
    """Turn the string into upper case."""


@dataclass(frozen=True)
class Trim:
    """Strip surrounding whitespace."""


@dataclass(frozen=True)
class Append:
    """Append "bar" the given number of times."""

    times: int


Command = Uppercase | Trim | Append


def _apply(text: str, command: Command) -> str:
    match command:
        case Uppercase():
            return text.upper()
        case Trim():
            return text.strip()
        case Append(times=times):
            return text + "bar" * times
        case _:
            raise TypeError(f"unknown command: {command!r}")


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string."""
    return [_apply(text, command) for text, command in items]


def trim_me(text: str) -> str:
    """Remove whitespace from both ends."""
    return text.strip()


def compose_me(text: str) -> str:
    """Add " world!" to the end."""
    return f"{text} world!"


def replace_me(text: str) -> str:
    """Replace "cars" with "balloons"."""
    return text.replace("cars", "balloons")


def vec_loop(values: Iterable[int]) -> list[int]:
    """Each value doubled."""
    doubled = list(values)
    for index, value in enumerate(doubled):
        doubled[index] = value * 2
    return doubled


def vec_map(values: Iterable[int]) -> list[int]:
    """Each value doubled, built by mapping."""
    return [value * 2 for value in values]