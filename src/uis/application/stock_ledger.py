"""Application service: Stock Ledger.

The ledger is the only writer of inventory variants.  Adding stock
reconciles each size line against the existing variants: a known
name/category/size/color combination is topped up, an unknown one gets a
fresh barcode and a new variant.  Sizes are applied one by one and the
caller gets back exactly which ones made it.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone

from uis.application.dto import (
    AddStockResult,
    CategoryStock,
    QuantityBands,
    SizeFailure,
    SizeQuantity,
    VariantPage,
)
from uis.domain.exceptions import (
    DomainException,
    DuplicateVariantError,
    EntityNotFoundError,
    ValidationError,
)
from uis.domain.model.value_objects import (
    Category,
    Money,
    require_stock_level,
    require_text,
)
from uis.domain.model.variant import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    InventoryVariant,
    variant_key,
)
from uis.domain.repository.variant_repository import VariantFilter, VariantRepository
from uis.domain.service.barcode_allocator import BarcodeAllocator
from uis.logging_config import get_logger

logger = get_logger("application.stock_ledger")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StockLedger:

    def __init__(
        self,
        variant_repo: VariantRepository,
        allocator: BarcodeAllocator | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._variant_repo = variant_repo
        self._allocator = allocator or BarcodeAllocator(variant_repo)
        self._clock = clock

    # --- Commands -------------------------------------------------------------

    def add_stock(
        self,
        item_name: str,
        category: Category | str,
        sizes: Sequence[SizeQuantity | tuple[str, int]],
        color: str,
        unit_price: Money | str,
        description: str | None = None,
    ) -> AddStockResult:
        """Add stock for one item in several sizes.

        Every input is validated before anything is written.  After that,
        each non-zero size line is applied on its own; a failing line is
        recorded in ``result.failures`` and the remaining lines still run.
        """
        name = require_text(item_name, "item_name")
        parsed_category = Category.parse(category)
        clean_color = require_text(color, "color")
        price = Money.of(unit_price)
        lines = [_as_size_quantity(entry) for entry in sizes]
        if not lines:
            raise ValidationError("At least one size is required", field="sizes")

        result = AddStockResult()
        for line in lines:
            if line.quantity == 0:
                continue
            try:
                variant, created = self._apply_line(
                    name, parsed_category, line, clean_color, price, description
                )
            except DomainException as exc:
                logger.warning(
                    "Stock line failed",
                    extra={"item_name": name, "size": line.size, "error": str(exc)},
                )
                result.failures.append(SizeFailure(line.size, line.quantity, exc))
                continue
            if created:
                result.created.append(variant)
            else:
                result.updated.append(variant)

        logger.info(
            "Stock added",
            extra={
                "item_name": name,
                "created_count": len(result.created),
                "updated_count": len(result.updated),
                "failed_count": len(result.failures),
            },
        )
        return result

    def update_variant(
        self,
        variant_id: str,
        *,
        item_name: str,
        category: Category | str,
        size: str,
        color: str,
        quantity: int,
        unit_price: Money | str,
        description: str | None = None,
    ) -> InventoryVariant:
        """Overwrite every editable field of a variant (not additive)."""
        now = self._clock()
        variant = self._variant_repo.update(
            variant_id,
            lambda v: v.overwrite(
                item_name, category, size, color, quantity, unit_price, description, now
            ),
        )
        logger.info("Variant updated", extra={"variant_id": variant_id})
        return variant

    def set_quantity(self, variant_id: str, quantity: int) -> InventoryVariant:
        """Overwrite the stock count of a variant (stock correction)."""
        require_stock_level(quantity)
        now = self._clock()
        variant = self._variant_repo.update(
            variant_id, lambda v: v.set_quantity(quantity, now)
        )
        logger.info(
            "Stock quantity set",
            extra={"variant_id": variant_id, "quantity": quantity},
        )
        return variant

    def delete_variant(self, variant_id: str) -> None:
        """Remove a variant.  Deliveries recorded against it are kept."""
        if not self._variant_repo.delete(variant_id):
            raise EntityNotFoundError("Variant", variant_id)
        logger.info("Variant deleted", extra={"variant_id": variant_id})

    # --- Queries --------------------------------------------------------------

    def get(self, variant_id: str) -> InventoryVariant:
        variant = self._variant_repo.get_by_id(variant_id)
        if variant is None:
            raise EntityNotFoundError("Variant", variant_id)
        return variant

    def find_by_barcode(self, barcode: str) -> InventoryVariant:
        variant = self._variant_repo.get_by_barcode(barcode.strip())
        if variant is None:
            raise EntityNotFoundError("Variant", barcode, f"No item with barcode '{barcode}'")
        return variant

    def list_variants(
        self,
        criteria: VariantFilter | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> VariantPage:
        """One page of matching variants, newest first."""
        if page < 1:
            raise ValidationError("Page must be 1 or greater", field="page")
        if page_size < 1:
            raise ValidationError("Page size must be 1 or greater", field="page_size")

        matches = self._find(criteria)
        matches.sort(key=lambda v: v.created_at, reverse=True)
        start = (page - 1) * page_size
        return VariantPage(
            items=matches[start:start + page_size],
            total_count=len(matches),
            page=page,
            page_size=page_size,
        )

    def all_variants(self, criteria: VariantFilter | None = None) -> list[InventoryVariant]:
        """Every matching variant ordered by category, then item name."""
        matches = self._find(criteria)
        matches.sort(key=lambda v: (str(v.category), v.item_name))
        return matches

    def total_variant_count(self) -> int:
        return len(self._variant_repo.list_all())

    def total_quantity_sum(self) -> int:
        return sum(v.quantity for v in self._variant_repo.list_all())

    def count_by_quantity_band(
        self, low_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> QuantityBands:
        variants = self._variant_repo.list_all()
        return QuantityBands(
            out_of_stock=sum(1 for v in variants if v.quantity == 0),
            low_stock=sum(1 for v in variants if v.is_low_stock(low_threshold)),
        )

    def low_stock_variants(
        self,
        low_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        limit: int | None = None,
    ) -> list[InventoryVariant]:
        """Variants with 0 < quantity <= threshold, lowest first."""
        low = [v for v in self._variant_repo.list_all() if v.is_low_stock(low_threshold)]
        low.sort(key=lambda v: v.quantity)
        return low if limit is None else low[:limit]

    def sum_by_category(self) -> list[CategoryStock]:
        totals: dict[str, list[int]] = {}
        for v in self._variant_repo.list_all():
            bucket = totals.setdefault(str(v.category), [0, 0])
            bucket[0] += v.quantity
            bucket[1] += 1
        breakdown = [
            CategoryStock(category=name, total_quantity=qty, item_count=count)
            for name, (qty, count) in totals.items()
        ]
        breakdown.sort(key=lambda c: (-c.total_quantity, c.category))
        return breakdown

    # --- Internal helpers -----------------------------------------------------

    def _find(self, criteria: VariantFilter | None) -> list[InventoryVariant]:
        criteria = criteria or VariantFilter()
        if criteria.category is not None:
            Category.parse(criteria.category)
        return self._variant_repo.find(criteria)

    def _apply_line(
        self,
        item_name: str,
        category: Category,
        line: SizeQuantity,
        color: str,
        price: Money,
        description: str | None,
    ) -> tuple[InventoryVariant, bool]:
        """Top up or create the variant for one size.  Returns (variant, created)."""
        key = variant_key(item_name, category, line.size, color)
        existing = self._variant_repo.get_by_key(key)
        if existing is not None:
            return self._increment(existing.id, line.quantity), False

        now = self._clock()
        try:
            variant = self._allocator.insert_new(
                lambda barcode: InventoryVariant.create(
                    item_name=item_name,
                    category=category,
                    size=line.size,
                    color=color,
                    barcode=barcode,
                    quantity=line.quantity,
                    unit_price=price,
                    description=description,
                    now=now,
                )
            )
        except DuplicateVariantError:
            # another caller created this variant first: top it up instead
            winner = self._variant_repo.get_by_key(key)
            if winner is None:
                raise
            return self._increment(winner.id, line.quantity), False

        logger.info(
            "Variant created",
            extra={"variant_id": variant.id, "barcode": variant.barcode, "size": line.size},
        )
        return variant, True

    def _increment(self, variant_id: str, quantity: int) -> InventoryVariant:
        now = self._clock()
        return self._variant_repo.update(
            variant_id, lambda v: v.add_quantity(quantity, now)
        )


def _as_size_quantity(entry: SizeQuantity | tuple[str, int]) -> SizeQuantity:
    if isinstance(entry, SizeQuantity):
        size, quantity = entry.size, entry.quantity
    else:
        size, quantity = entry
    return SizeQuantity(
        size=require_text(size, "size"),
        quantity=require_stock_level(quantity),
    )
