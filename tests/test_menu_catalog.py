"""
Tests for the menu catalog.
"""

import pytest
from pydantic import ValidationError

from orderly_bot.tasks.menu_catalog import (
    DEFAULT_MENU_ITEMS,
    MenuCatalog,
    MenuItem,
    default_catalog,
)


class TestMenuItem:

    def test_payload_uses_wire_field_names(self):
        item = MenuItem(name="Mango Tart", unit_price=280, glyph="🥭")
        assert item.to_payload() == {"name": "Mango Tart", "price": 280, "emoji": "🥭"}

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            MenuItem(name="Free Cake", unit_price=0)

    def test_items_are_immutable(self):
        item = MenuItem(name="Mango Tart", unit_price=280)
        with pytest.raises(ValidationError):
            item.unit_price = 1


class TestMenuCatalog:

    def test_default_catalog_has_nine_items_in_order(self):
        catalog = default_catalog()
        assert len(catalog) == 9
        assert catalog.names()[0] == "Chocolate Cake"
        assert catalog.names()[-1] == "Fruit Tart"

    def test_find_by_name_is_exact_after_trimming(self):
        catalog = default_catalog()
        assert catalog.find_by_name("  Chocolate Cake ").unit_price == 350
        assert catalog.find_by_name("chocolate cake") is None
        assert catalog.find_by_name("Chocolate") is None
        assert catalog.find_by_name(None) is None

    def test_contains(self):
        catalog = default_catalog()
        assert "Coffee & Walnut Cake" in catalog
        assert "Lemon Drizzle" not in catalog
        assert 42 not in catalog

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            MenuCatalog([
                MenuItem(name="Mango Tart", unit_price=280),
                MenuItem(name="Mango Tart", unit_price=300),
            ])

    def test_payload_preserves_order(self):
        payload = default_catalog().to_payload()
        assert [p["name"] for p in payload] == [i.name for i in DEFAULT_MENU_ITEMS]
        assert payload[1] == {"name": "Blueberry Cheesecake", "price": 420, "emoji": "🫐"}
