"""Unit tests for the InventoryVariant aggregate."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from uis.domain.exceptions import ValidationError
from uis.domain.model.value_objects import Category, Money
from uis.domain.model.variant import InventoryVariant, variant_key

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
T1 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def _variant(quantity: int = 5, price: str = "100") -> InventoryVariant:
    return InventoryVariant.create(
        item_name="Shirt",
        category="Uniform",
        size="M",
        color="Blue",
        barcode="123456789012",
        quantity=quantity,
        unit_price=price,
        now=T0,
    )


class TestCreate:

    def test_fields_are_normalised(self):
        v = InventoryVariant.create(
            item_name="  Shirt ", category="Uniform", size=" M", color="Blue ",
            barcode="123456789012", quantity=5, unit_price="100",
            description="   ", now=T0,
        )
        assert v.item_name == "Shirt"
        assert v.category is Category.UNIFORM
        assert v.size == "M"
        assert v.color == "Blue"
        assert v.description is None
        assert v.unit_price == Money.of("100")
        assert v.created_at == v.updated_at == T0
        assert v.id is None

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _variant(quantity=-1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            _variant(price="-5")

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="Unknown category"):
            InventoryVariant.create(
                item_name="Shirt", category="Socks", size="M", color="Blue",
                barcode="123456789012", quantity=1, unit_price="1",
            )

    def test_key(self):
        assert _variant().key == variant_key("Shirt", Category.UNIFORM, "M", "Blue")
        assert _variant().key == ("Shirt", "Uniform", "M", "Blue")


class TestStockStatus:

    @pytest.mark.parametrize(
        "quantity, status",
        [(0, "Out of Stock"), (1, "Low Stock"), (10, "Low Stock"), (11, "In Stock")],
    )
    def test_default_threshold(self, quantity, status):
        assert _variant(quantity=quantity).stock_status() == status

    def test_custom_threshold(self):
        assert _variant(quantity=11).stock_status(threshold=20) == "Low Stock"

    def test_zero_is_not_low_stock(self):
        assert not _variant(quantity=0).is_low_stock()
        assert _variant(quantity=10).is_low_stock()

    def test_total_value(self):
        assert _variant(quantity=3, price="12.50").total_value.amount == Decimal("37.50")


class TestMutations:

    def test_add_quantity_accumulates(self):
        v = _variant(quantity=5)
        v.add_quantity(3, now=T1)
        assert v.quantity == 8
        assert v.updated_at == T1
        assert v.created_at == T0

    @pytest.mark.parametrize("delta", [0, -2])
    def test_add_quantity_must_be_positive(self, delta):
        v = _variant(quantity=5)
        with pytest.raises(ValidationError, match="positive integer"):
            v.add_quantity(delta)
        assert v.quantity == 5

    def test_set_quantity_overwrites(self):
        v = _variant(quantity=5)
        v.set_quantity(0, now=T1)
        assert v.quantity == 0

    def test_set_quantity_negative_leaves_value(self):
        v = _variant(quantity=5)
        with pytest.raises(ValidationError):
            v.set_quantity(-1)
        assert v.quantity == 5

    def test_overwrite_replaces_fields_but_not_barcode(self):
        v = _variant(quantity=5)
        v.overwrite("Polo", "T-Shirt", "L", "Red", 2, "80", "cotton", now=T1)
        assert (v.item_name, v.category, v.size, v.color) == ("Polo", Category.T_SHIRT, "L", "Red")
        assert v.quantity == 2
        assert v.unit_price == Money.of("80")
        assert v.description == "cotton"
        assert v.barcode == "123456789012"

    def test_overwrite_is_all_or_nothing(self):
        v = _variant(quantity=5)
        with pytest.raises(ValidationError):
            v.overwrite("Polo", "T-Shirt", "L", "Red", 2, "-80", None)
        assert v.item_name == "Shirt"
        assert v.quantity == 5
