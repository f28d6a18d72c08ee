"""CLI commands for the dashboard and reports."""

from __future__ import annotations

from datetime import datetime

import click

from uis.application.report_aggregator import (
    DELIVERY_EXPORT_COLUMNS,
    INVENTORY_REPORT_COLUMNS,
)
from uis.domain.exceptions import DomainException
from uis.domain.repository.variant_repository import VariantFilter
from uis.infrastructure.bootstrap import report_aggregator
from uis.infrastructure.cli.delivery_commands import DATE, build_delivery_filter
from uis.infrastructure.cli.stock_commands import CATEGORY_CHOICE
from uis.infrastructure.cli.table import echo_table

_WIDTHS = {
    "Item Name": 20, "Category": 9, "Size": 6, "Color": 10, "Barcode": 12,
    "Current Stock": 7, "Unit Price": 10, "Total Value": 12, "Description": 48,
    "Status": 12, "Date Added": 19, "Last Updated": 19,
    "Delivery Date": 10, "Customer Name": 18, "Quantity Delivered": 5,
    "Total Amount": 12, "Delivered By": 12, "Notes": 20,
}


def _columns(names) -> list[tuple[str, int]]:
    return [(name, _WIDTHS[name]) for name in names]


@click.command("dashboard")
def report_dashboard() -> None:
    """Show headline stock and delivery figures."""
    snap = report_aggregator().dashboard_snapshot()

    click.echo(f"Total items:           {snap.total_items}")
    click.echo(f"Total stock:           {snap.total_stock}")
    click.echo(f"Low stock items:       {snap.low_stock_count}")
    click.echo(f"Out of stock items:    {snap.out_of_stock_count}")
    click.echo(f"Deliveries today:      {snap.today_delivery_count}")
    click.echo(f"Deliveries this month: {snap.this_month_delivery_count}")

    if snap.category_breakdown:
        click.echo()
        echo_table(
            [("Category", 10), ("Quantity", 9), ("Items", 6)],
            (
                {"Category": c.category, "Quantity": c.total_quantity, "Items": c.item_count}
                for c in snap.category_breakdown
            ),
        )
    if snap.low_stock_list:
        click.echo()
        click.echo("Low stock:")
        for v in snap.low_stock_list:
            click.echo(f"  {v.item_name} ({v.size}, {v.color}): {v.quantity}")
    if snap.recent_deliveries:
        click.echo()
        click.echo("Recent deliveries:")
        for d in snap.recent_deliveries:
            click.echo(
                f"  {d.delivery.delivery_date.astimezone():%Y-%m-%d} "
                f"{d.delivery.customer_name}: {d.delivery.quantity_delivered} x "
                f"{d.variant.item_name} by {d.user.username}"
            )


@click.command("inventory")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Filter by category.")
@click.option("--search", default=None, help="Match item name or barcode.")
@click.option("--low-stock", is_flag=True, default=False, help="Only low and out-of-stock items.")
def report_inventory(category: str | None, search: str | None, low_stock: bool) -> None:
    """Inventory rows as exported, with a summary line."""
    aggregator = report_aggregator()
    try:
        if low_stock:
            rows = aggregator.flatten_inventory_for_report(
                category, low_stock_only=True, search_text=search
            )
        else:
            rows = aggregator.flatten_inventory_for_export(
                VariantFilter(category=category, search_text=search)
            )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    echo_table(_columns(INVENTORY_REPORT_COLUMNS), rows)


@click.command("deliveries")
@click.option("--from", "start", type=DATE, default=None, help="First day (YYYY-MM-DD).")
@click.option("--to", "end", type=DATE, default=None, help="Last day, inclusive (YYYY-MM-DD).")
@click.option("--customer", default=None, help="Match customer name.")
def report_deliveries(start: datetime | None, end: datetime | None, customer: str | None) -> None:
    """Delivery report rows with totals."""
    aggregator = report_aggregator()
    criteria = build_delivery_filter(start, end, customer)
    rows = aggregator.flatten_deliveries_for_export(criteria)

    if not rows:
        click.echo("No delivery records found for the selected criteria.")
        return

    echo_table(_columns(DELIVERY_EXPORT_COLUMNS[:11]), rows)
    totals = aggregator.delivery_totals(criteria)
    click.echo(f"Total deliveries: {totals.count}   Total amount: Rs {totals.total_amount:.2f}")
