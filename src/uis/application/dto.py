"""Data Transfer Objects: plain containers that cross layer boundaries.

Inputs describe what a caller asked for; outputs are what the ledger,
the delivery recorder and the report aggregator hand back to rendering,
spreadsheet and PDF layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from uis.domain.exceptions import DomainException, PartialFailureError
from uis.domain.model.delivery import DeliveryRecord
from uis.domain.model.user import User
from uis.domain.model.variant import InventoryVariant


@dataclass(frozen=True)
class SizeQuantity:
    """Input: one size line of a stock addition."""

    size: str
    quantity: int


@dataclass(frozen=True)
class SizeFailure:
    """A size line that could not be applied, with the reason."""

    size: str
    quantity: int
    error: DomainException


@dataclass
class AddStockResult:
    """Outcome of a multi-size stock addition.

    Sizes are applied independently, so a result can hold applied
    changes and failures at the same time.
    """

    created: list[InventoryVariant] = field(default_factory=list)
    updated: list[InventoryVariant] = field(default_factory=list)
    failures: list[SizeFailure] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failures) and bool(self.created or self.updated)

    @property
    def ok(self) -> bool:
        return not self.failures

    def raise_for_failures(self) -> None:
        """Raise PartialFailureError (carrying this result) if any size failed."""
        if self.failures:
            raise PartialFailureError(self)

    def summary(self, item_name: str) -> str:
        created, updated = len(self.created), len(self.updated)
        if created and updated:
            return (
                f"Added {created} new size(s) and updated {updated} "
                f"existing size(s) for {item_name}"
            )
        if created:
            return f"Successfully added {created} size(s) for {item_name}"
        if updated:
            return f"Updated quantities for {updated} existing size(s) of {item_name}"
        if self.failures:
            return f"No sizes of {item_name} could be applied"
        return "No items were added (all quantities were 0)"


@dataclass(frozen=True)
class VariantPage:
    items: list[InventoryVariant]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return -(-self.total_count // self.page_size)


@dataclass(frozen=True)
class QuantityBands:
    out_of_stock: int
    low_stock: int


@dataclass(frozen=True)
class CategoryStock:
    category: str
    total_quantity: int
    item_count: int


@dataclass(frozen=True)
class ResolvedDelivery:
    """A delivery with its variant and user looked up at query time."""

    delivery: DeliveryRecord
    variant: InventoryVariant
    user: User

    @property
    def total_amount(self) -> Decimal:
        # current price, not a snapshot
        return self.variant.unit_price.amount * self.delivery.quantity_delivered.value


@dataclass(frozen=True)
class DashboardSnapshot:
    total_items: int = 0
    total_stock: int = 0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    today_delivery_count: int = 0
    this_month_delivery_count: int = 0
    recent_deliveries: list[ResolvedDelivery] = field(default_factory=list)
    low_stock_list: list[InventoryVariant] = field(default_factory=list)
    category_breakdown: list[CategoryStock] = field(default_factory=list)


@dataclass(frozen=True)
class DeliveryTotals:
    count: int
    total_amount: Decimal
