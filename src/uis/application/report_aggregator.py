"""Application service: Report Aggregator (read side only).

Builds the dashboard snapshot and flattens ledger and delivery data into
row records for the spreadsheet and PDF layers.  The column names and
their order are what the downstream file layouts are built on, so they
are fixed here.

Nothing in this module writes.  A dashboard snapshot is several
independent queries; they are not isolated from each other, and a
failing one is replaced by an empty value instead of failing the page.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any, TypeVar

from uis.application.date_ranges import day_bounds, month_bounds
from uis.application.delivery_recorder import DeliveryRecorder
from uis.application.dto import DashboardSnapshot, DeliveryTotals
from uis.application.stock_ledger import StockLedger
from uis.domain.model.value_objects import require_aware
from uis.domain.model.variant import DEFAULT_LOW_STOCK_THRESHOLD, InventoryVariant
from uis.domain.repository.delivery_repository import DeliveryFilter
from uis.domain.repository.variant_repository import VariantFilter
from uis.logging_config import get_logger

logger = get_logger("application.report_aggregator")

T = TypeVar("T")

Row = dict[str, Any]

INVENTORY_EXPORT_COLUMNS = (
    "Item Name",
    "Category",
    "Size",
    "Color",
    "Barcode",
    "Current Stock",
    "Unit Price",
    "Total Value",
    "Description",
    "Status",
    "Date Added",
    "Last Updated",
)

# the inventory report is the export without the audit timestamps
INVENTORY_REPORT_COLUMNS = INVENTORY_EXPORT_COLUMNS[:10]

DELIVERY_EXPORT_COLUMNS = (
    "Delivery Date",
    "Customer Name",
    "Item Name",
    "Category",
    "Size",
    "Color",
    "Barcode",
    "Quantity Delivered",
    "Unit Price",
    "Total Amount",
    "Delivered By",
    "Notes",
)

DASHBOARD_LIST_LIMIT = 5
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def local_now() -> datetime:
    return datetime.now().astimezone()


class ReportAggregator:

    def __init__(
        self,
        ledger: StockLedger,
        deliveries: DeliveryRecorder,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        display_tz: tzinfo | None = None,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self._ledger = ledger
        self._deliveries = deliveries
        self._threshold = low_stock_threshold
        self._display_tz = display_tz
        self._clock = clock

    # --- Dashboard ------------------------------------------------------------

    def dashboard_snapshot(self, now: datetime | None = None) -> DashboardSnapshot:
        """Headline counters plus the short lists shown on the dashboard.

        ``now`` fixes the caller's calendar for the "today" and "this
        month" delivery counters.
        """
        now = require_aware(now or self._clock(), "now")
        today = day_bounds(now)
        this_month = month_bounds(now)

        bands = self._safe(
            "quantity_bands",
            lambda: self._ledger.count_by_quantity_band(self._threshold),
            None,
        )
        return DashboardSnapshot(
            total_items=self._safe("total_items", self._ledger.total_variant_count, 0),
            total_stock=self._safe("total_stock", self._ledger.total_quantity_sum, 0),
            low_stock_count=bands.low_stock if bands else 0,
            out_of_stock_count=bands.out_of_stock if bands else 0,
            today_delivery_count=self._safe(
                "today_deliveries", lambda: self._deliveries.count_in_range(*today), 0
            ),
            this_month_delivery_count=self._safe(
                "month_deliveries", lambda: self._deliveries.count_in_range(*this_month), 0
            ),
            recent_deliveries=self._safe(
                "recent_deliveries",
                lambda: self._deliveries.list_deliveries()[:DASHBOARD_LIST_LIMIT],
                [],
            ),
            low_stock_list=self._safe(
                "low_stock_list",
                lambda: self._ledger.low_stock_variants(self._threshold, DASHBOARD_LIST_LIMIT),
                [],
            ),
            category_breakdown=self._safe("category_breakdown", self._ledger.sum_by_category, []),
        )

    # --- Inventory rows -------------------------------------------------------

    def flatten_inventory_for_export(self, criteria: VariantFilter | None = None) -> list[Row]:
        """All matching variants as export rows, then a blank row and a summary row."""
        variants = self._ledger.all_variants(criteria)
        rows = [self._inventory_row(v, INVENTORY_EXPORT_COLUMNS) for v in variants]

        total_stock = sum(v.quantity for v in variants)
        total_value = sum((v.total_value.amount for v in variants), Decimal("0"))
        low = sum(1 for v in variants if v.is_low_stock(self._threshold))
        out = sum(1 for v in variants if v.quantity == 0)

        rows.append(dict.fromkeys(INVENTORY_EXPORT_COLUMNS, ""))
        summary = dict.fromkeys(INVENTORY_EXPORT_COLUMNS, "")
        summary.update({
            "Item Name": "SUMMARY",
            "Current Stock": total_stock,
            "Total Value": total_value,
            "Description": (
                f"Total Items: {len(variants)} | Low Stock: {low} | Out of Stock: {out}"
            ),
        })
        rows.append(summary)
        return rows

    def flatten_inventory_for_report(
        self,
        category: str | None = None,
        low_stock_only: bool = False,
        search_text: str | None = None,
    ) -> list[Row]:
        """Inventory report rows; ``low_stock_only`` includes out-of-stock items."""
        criteria = VariantFilter(
            category=category,
            search_text=search_text,
            max_quantity=self._threshold if low_stock_only else None,
        )
        return [
            self._inventory_row(v, INVENTORY_REPORT_COLUMNS)
            for v in self._ledger.all_variants(criteria)
        ]

    # --- Delivery rows --------------------------------------------------------

    def flatten_deliveries_for_export(self, criteria: DeliveryFilter | None = None) -> list[Row]:
        rows: list[Row] = []
        for item in self._deliveries.list_deliveries(criteria):
            delivery, variant = item.delivery, item.variant
            rows.append({
                "Delivery Date": self._local(delivery.delivery_date).strftime(DATE_FORMAT),
                "Customer Name": delivery.customer_name,
                "Item Name": variant.item_name,
                "Category": str(variant.category),
                "Size": variant.size,
                "Color": variant.color,
                "Barcode": delivery.barcode,
                "Quantity Delivered": delivery.quantity_delivered.value,
                "Unit Price": variant.unit_price.amount,
                "Total Amount": item.total_amount,
                "Delivered By": item.user.username,
                "Notes": delivery.notes or "",
            })
        return rows

    def delivery_totals(self, criteria: DeliveryFilter | None = None) -> DeliveryTotals:
        """Count and amount footer for a delivery report."""
        items = self._deliveries.list_deliveries(criteria)
        return DeliveryTotals(
            count=len(items),
            total_amount=sum((i.total_amount for i in items), Decimal("0")),
        )

    # --- Internal helpers -----------------------------------------------------

    def _inventory_row(self, variant: InventoryVariant, columns: tuple[str, ...]) -> Row:
        row: Row = {
            "Item Name": variant.item_name,
            "Category": str(variant.category),
            "Size": variant.size,
            "Color": variant.color,
            "Barcode": variant.barcode,
            "Current Stock": variant.quantity,
            "Unit Price": variant.unit_price.amount,
            "Total Value": variant.total_value.amount,
            "Description": variant.description or "",
            "Status": variant.stock_status(self._threshold),
            "Date Added": self._local(variant.created_at).strftime(TIMESTAMP_FORMAT),
            "Last Updated": self._local(variant.updated_at).strftime(TIMESTAMP_FORMAT),
        }
        return {column: row[column] for column in columns}

    def _local(self, moment: datetime) -> datetime:
        return moment.astimezone(self._display_tz)

    def _safe(self, name: str, query: Callable[[], T], default: T) -> T:
        try:
            return query()
        except Exception:
            logger.exception("Dashboard query failed", extra={"query": name})
            return default
