"""Cart store port — where a registry keeps its snapshot between sessions.

A snapshot is a JSON-compatible dict::

    {
        "carts": [CategoryCart.to_snapshot(), ...],
        "cart_min_settings": {category_id: min_order_amount},
    }

Stores must round-trip exactly (``load()`` after ``save(x)`` equals ``x``),
and saving the same snapshot twice must be harmless.
"""

import copy
from abc import ABC, abstractmethod


def empty_snapshot():
    return {"carts": [], "cart_min_settings": {}}


class CartStore(ABC):
    @abstractmethod
    def load(self) -> dict | None:
        """Return the last saved snapshot, or None when nothing was saved."""
        ...

    @abstractmethod
    def save(self, snapshot: dict) -> None:
        ...


class InMemoryCartStore(CartStore):
    """Process-local store; keeps a private copy of the last snapshot."""

    def __init__(self, snapshot: dict | None = None) -> None:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count = 0

    def load(self) -> dict | None:
        return copy.deepcopy(self._snapshot)

    def save(self, snapshot: dict) -> None:
        self._snapshot = copy.deepcopy(snapshot)
        self.save_count += 1
