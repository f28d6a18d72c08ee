"""CLI commands for deliveries."""

from __future__ import annotations

from datetime import datetime

import click

from uis.application.date_ranges import inclusive_days
from uis.domain.exceptions import DomainException
from uis.domain.repository.delivery_repository import DeliveryFilter
from uis.infrastructure.bootstrap import delivery_recorder, stock_ledger
from uis.infrastructure.cli.table import echo_table

DATE = click.DateTime(formats=["%Y-%m-%d"])


def build_delivery_filter(
    start: datetime | None, end: datetime | None, customer: str | None
) -> DeliveryFilter:
    """Turn --from/--to/--customer into a filter.

    The period only applies when both dates are given; the end day is
    included in full.  Dates are read in the local calendar.
    """
    if start is not None and end is not None:
        tz = datetime.now().astimezone().tzinfo
        try:
            lower, upper = inclusive_days(start.date(), end.date(), tz)
        except DomainException as exc:
            raise click.BadParameter(str(exc), param_hint="--to")
        return DeliveryFilter(start=lower, end=upper, customer_name=customer)
    return DeliveryFilter(customer_name=customer)


@click.command("record")
@click.option("--variant-id", default=None, help="Item ID.")
@click.option("--barcode", default=None, help="Item barcode (alternative to --variant-id).")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--quantity", required=True, type=int, help="Quantity delivered.")
@click.option("--user", "user_id", required=True, help="ID of the user making the delivery.")
@click.option("--notes", default=None, help="Optional notes.")
def delivery_record(
    variant_id: str | None,
    barcode: str | None,
    customer: str,
    quantity: int,
    user_id: str,
    notes: str | None,
) -> None:
    """Record a delivery (stock levels are not changed)."""
    if (variant_id is None) == (barcode is None):
        raise click.UsageError("Give exactly one of --variant-id or --barcode")

    try:
        if barcode is not None:
            variant_id = stock_ledger().find_by_barcode(barcode).id
        record = delivery_recorder().record_delivery(
            variant_id=variant_id,
            customer_name=customer,
            quantity=quantity,
            delivered_by=user_id,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Delivery #{record.id} recorded: {record.quantity_delivered} x "
        f"{record.barcode} to {record.customer_name}"
    )


@click.command("list")
@click.option("--from", "start", type=DATE, default=None, help="First day (YYYY-MM-DD).")
@click.option("--to", "end", type=DATE, default=None, help="Last day, inclusive (YYYY-MM-DD).")
@click.option("--customer", default=None, help="Match customer name.")
def delivery_list(start: datetime | None, end: datetime | None, customer: str | None) -> None:
    """List deliveries, newest first."""
    criteria = build_delivery_filter(start, end, customer)
    items = delivery_recorder().list_deliveries(criteria)

    if not items:
        click.echo("No delivery records found.")
        return

    echo_table(
        [("ID", 5), ("Date", 10), ("Customer", 20), ("Item", 20), ("Size", 6),
         ("Qty", 5), ("By", 12)],
        (
            {
                "ID": i.delivery.id,
                "Date": i.delivery.delivery_date.astimezone().strftime("%Y-%m-%d"),
                "Customer": i.delivery.customer_name,
                "Item": i.variant.item_name,
                "Size": i.variant.size,
                "Qty": i.delivery.quantity_delivered.value,
                "By": i.user.username,
            }
            for i in items
        ),
    )
