"""A cons list, a copy-on-write sequence and picking the longer string."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Cons:
    """One cell of a cons list; the list ends where the tail is None."""

    head: int
    tail: Cons | None = None

    def __iter__(self) -> Iterator[int]:
        cell: Cons | None = self
        while cell is not None:
            yield cell.head
            cell = cell.tail


def create_empty_list() -> Cons | None:
    """The empty cons list."""
    return None


def create_non_empty_list() -> Cons | None:
    """A cons list holding 1, 2 and 3."""
    return Cons(1, Cons(2, Cons(3)))


class Cow:
    """A sequence of integers that is copied the first time it is changed."""

    def __init__(self, data: Sequence[int], *, owned: bool) -> None:
        self._data = data
        self._owned = owned

    @classmethod
    def borrow(cls, data: Sequence[int]) -> Cow:
        """Wrap data without copying it."""
        return cls(data, owned=False)

    @classmethod
    def own(cls, data: list[int]) -> Cow:
        """Take a list to be changed in place."""
        return cls(data, owned=True)

    @property
    def is_owned(self) -> bool:
        return self._owned

    def to_mut(self) -> list[int]:
        """A mutable list, copying borrowed data first."""
        if not self._owned:
            self._data = list(self._data)
            self._owned = True
        return self._data  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> int:
        return self._data[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __repr__(self) -> str:
        kind = "Owned" if self._owned else "Borrowed"
        return f"{kind}({list(self._data)!r})"


def abs_all(cow: Cow) -> Cow:
    """Make every value non-negative, copying borrowed data only if needed."""
    for index, value in enumerate(list(cow)):
        if value < 0:
            cow.to_mut()[index] = -value
    return cow


def longest(x: str, y: str) -> str:
    """The string longer in UTF-8 bytes, or y when neither is longer."""
    return x if len(x.encode("utf-8")) > len(y.encode("utf-8")) else y