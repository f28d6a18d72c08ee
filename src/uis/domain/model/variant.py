"""InventoryVariant aggregate: one stock row per name/category/size/color.

A variant is created the first time a combination is stocked and is
topped up on every later addition of the same combination.  Its barcode
is assigned once at creation and never changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from uis.domain.exceptions import ValidationError
from uis.domain.model.value_objects import (
    Category,
    Money,
    require_stock_level,
    require_text,
)

DEFAULT_LOW_STOCK_THRESHOLD = 10

STATUS_OUT_OF_STOCK = "Out of Stock"
STATUS_LOW_STOCK = "Low Stock"
STATUS_IN_STOCK = "In Stock"

VariantKey = tuple[str, str, str, str]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InventoryVariant:
    """Aggregate root for a stocked variant.

    Invariants:
    - ``quantity`` is never negative
    - ``barcode`` is immutable once the variant exists

    ``id`` is ``None`` until the repository inserts the variant.
    """

    item_name: str
    category: Category
    size: str
    color: str
    barcode: str
    quantity: int
    unit_price: Money
    description: str | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        item_name: str,
        category: Category | str,
        size: str,
        color: str,
        barcode: str,
        quantity: int,
        unit_price: Money | str,
        description: str | None = None,
        now: datetime | None = None,
    ) -> InventoryVariant:
        """Build a new, not yet persisted variant with all rules checked."""
        stamp = now or _now()
        return cls(
            item_name=require_text(item_name, "item_name"),
            category=Category.parse(category),
            size=require_text(size, "size"),
            color=require_text(color, "color"),
            barcode=barcode,
            quantity=require_stock_level(quantity),
            unit_price=Money.of(unit_price),
            description=_clean_description(description),
            created_at=stamp,
            updated_at=stamp,
        )

    # --- Derived values -------------------------------------------------------

    @property
    def key(self) -> VariantKey:
        return variant_key(self.item_name, self.category, self.size, self.color)

    @property
    def total_value(self) -> Money:
        return self.unit_price * self.quantity

    def stock_status(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> str:
        if self.quantity == 0:
            return STATUS_OUT_OF_STOCK
        if self.quantity <= threshold:
            return STATUS_LOW_STOCK
        return STATUS_IN_STOCK

    def is_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return 0 < self.quantity <= threshold

    # --- Mutations ------------------------------------------------------------

    def add_quantity(self, delta: int, now: datetime | None = None) -> None:
        """Merge a stock addition into this variant (additive)."""
        if not isinstance(delta, int) or isinstance(delta, bool) or delta <= 0:
            raise ValidationError(
                "Stock addition must be a positive integer", field="quantity"
            )
        self.quantity += delta
        self.updated_at = now or _now()

    def set_quantity(self, quantity: int, now: datetime | None = None) -> None:
        """Overwrite the stock count (stock correction)."""
        self.quantity = require_stock_level(quantity)
        self.updated_at = now or _now()

    def overwrite(
        self,
        item_name: str,
        category: Category | str,
        size: str,
        color: str,
        quantity: int,
        unit_price: Money | str,
        description: str | None,
        now: datetime | None = None,
    ) -> None:
        """Replace every editable field.  The barcode is left untouched."""
        # validate everything before assigning anything
        new_name = require_text(item_name, "item_name")
        new_category = Category.parse(category)
        new_size = require_text(size, "size")
        new_color = require_text(color, "color")
        new_quantity = require_stock_level(quantity)
        new_price = Money.of(unit_price)

        self.item_name = new_name
        self.category = new_category
        self.size = new_size
        self.color = new_color
        self.quantity = new_quantity
        self.unit_price = new_price
        self.description = _clean_description(description)
        self.updated_at = now or _now()


def variant_key(
    item_name: str, category: Category | str, size: str, color: str
) -> VariantKey:
    """The exact-match identity of a variant."""
    return (item_name, str(category), size, color)


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    cleaned = description.strip()
    return cleaned or None
