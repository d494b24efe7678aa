"""
Menu Catalog for the Order Conversation.

This module holds the static menu: an ordered, read-only collection of
MenuItems keyed by their unique name. The catalog is built once at process
start and shared by every session; nothing can mutate it afterwards.
"""

import logging
from typing import Any, Iterable, Iterator

from pydantic import BaseModel, ConfigDict, PositiveInt

logger = logging.getLogger(__name__)


class MenuItem(BaseModel):
    """A single menu entry. Prices are in minor currency units."""

    model_config = ConfigDict(frozen=True)

    name: str
    unit_price: PositiveInt
    glyph: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Wire form sent to the order service."""
        return {"name": self.name, "price": self.unit_price, "emoji": self.glyph}


class MenuCatalog:
    """
    Ordered, immutable collection of menu items.

    Lookups are exact after trimming surrounding whitespace; the catalog does
    no fuzzy matching because the order service is expected to return
    canonical item names.
    """

    def __init__(self, items: Iterable[MenuItem]):
        items = tuple(items)
        by_name: dict[str, MenuItem] = {}
        for item in items:
            if item.name in by_name:
                raise ValueError(f"Duplicate menu item name: {item.name!r}")
            by_name[item.name] = item
        self._items = items
        self._by_name = by_name

    def items(self) -> tuple[MenuItem, ...]:
        return self._items

    def names(self) -> list[str]:
        return [item.name for item in self._items]

    def find_by_name(self, name: str | None) -> MenuItem | None:
        """Return the item whose name equals `name` once trimmed, else None."""
        if name is None:
            return None
        return self._by_name.get(name.strip())

    def to_payload(self) -> list[dict[str, Any]]:
        return [item.to_payload() for item in self._items]

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find_by_name(name) is not None


# Today's menu: cakes and tarts, priced in rupees
DEFAULT_MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem(name="Chocolate Cake", unit_price=350, glyph="🍫"),
    MenuItem(name="Blueberry Cheesecake", unit_price=420, glyph="🫐"),
    MenuItem(name="Mango Tart", unit_price=280, glyph="🥭"),
    MenuItem(name="Red Velvet Cake", unit_price=400, glyph="❤️🎂"),
    MenuItem(name="Carrot Cake", unit_price=300, glyph="🥕🍰"),
    MenuItem(name="Coffee & Walnut Cake", unit_price=380, glyph="☕️🌰"),
    MenuItem(name="Strawberry Cheesecake", unit_price=420, glyph="🍓🍰"),
    MenuItem(name="Chocolate Tart", unit_price=260, glyph="🍫🍮"),
    MenuItem(name="Fruit Tart", unit_price=350, glyph="🍑🥝🍓"),
)


def default_catalog() -> MenuCatalog:
    """Build the catalog served by default."""
    return MenuCatalog(DEFAULT_MENU_ITEMS)
