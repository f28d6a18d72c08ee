"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from uis.domain.exceptions import ValidationError
from uis.domain.model.value_objects import (
    Category,
    Money,
    Quantity,
    require_stock_level,
    require_text,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        m = Money.of(100)
        assert m.amount == Decimal("100")

    def test_zero_allowed(self):
        assert Money.of("0").amount == Decimal("0")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount") as exc_info:
            Money.of("ten")
        assert exc_info.value.field == "unit_price"

    def test_nan_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("NaN")

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_str_formatting(self):
        assert str(Money.of("100")) == "Rs 100.00"
        assert str(Money.of("9.5")) == "Rs 9.50"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)

    def test_str(self):
        assert str(Quantity(7)) == "7"


# ── Category ─────────────────────────────────────────────────────────────────


class TestCategory:

    @pytest.mark.parametrize("raw", ["T-Shirt", "Jacket", "Cap", "Trousers", "Uniform"])
    def test_known_categories_parse(self, raw):
        assert Category.parse(raw).value == raw

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError, match="Unknown category") as exc_info:
            Category.parse("Socks")
        assert exc_info.value.field == "category"

    def test_match_is_exact(self):
        with pytest.raises(ValidationError):
            Category.parse("uniform")

    def test_parse_passes_members_through(self):
        assert Category.parse(Category.CAP) is Category.CAP

    def test_str_is_display_value(self):
        assert str(Category.T_SHIRT) == "T-Shirt"


# ── Field helpers ────────────────────────────────────────────────────────────


class TestFieldHelpers:

    def test_stock_level_accepts_zero(self):
        assert require_stock_level(0) == 0

    def test_stock_level_rejects_negative(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            require_stock_level(-1)

    def test_stock_level_rejects_bool(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            require_stock_level(True)

    def test_text_is_stripped(self):
        assert require_text("  Shirt ", "item_name") == "Shirt"

    def test_blank_text_rejected(self):
        with pytest.raises(ValidationError, match="Item name is required"):
            require_text("   ", "item_name")
