"""Fruit baskets kept as mappings from fruit to count."""

from __future__ import annotations

import enum
from collections.abc import MutableMapping


class Fruit(enum.Enum):
    """Kinds of fruit for the cake."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fruit_basket() -> dict[str, int]:
    """A basket with at least three kinds of fruit and five pieces in total."""
    basket = {"banana": 2}
    basket["apple"] = 3
    basket["mango"] = 1
    return basket


def fill_fruit_basket(basket: MutableMapping[Fruit, int]) -> None:
    """Add one of every kind of fruit not yet in the basket, leaving the rest alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, 1)