"""CLI commands for stock (inventory variants)."""

from __future__ import annotations

import click

from uis.application.dto import SizeQuantity
from uis.domain.exceptions import DomainException, PartialFailureError
from uis.domain.model.value_objects import Category
from uis.domain.model.variant import InventoryVariant
from uis.domain.repository.variant_repository import VariantFilter
from uis.infrastructure.bootstrap import stock_ledger
from uis.infrastructure.cli.table import echo_table
from uis.infrastructure.config import get_settings

CATEGORY_CHOICE = click.Choice([c.value for c in Category])


def _parse_sizes(raw_sizes: tuple[str, ...]) -> list[SizeQuantity]:
    """Parse ('M:5', 'L:3') into SizeQuantity list."""
    specs: list[SizeQuantity] = []
    for pair in raw_sizes:
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid size format '{pair}'. Expected 'Size:Quantity'."
            )
        size, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for size '{size}'."
            )
        specs.append(SizeQuantity(size=size.strip(), quantity=qty))
    return specs


def _variant_row(v: InventoryVariant) -> dict:
    return {
        "ID": v.id,
        "Barcode": v.barcode,
        "Item": v.item_name,
        "Category": str(v.category),
        "Size": v.size,
        "Color": v.color,
        "Qty": v.quantity,
        "Price": v.unit_price.amount,
    }


VARIANT_COLUMNS = [
    ("ID", 5), ("Barcode", 12), ("Item", 20), ("Category", 9),
    ("Size", 6), ("Color", 10), ("Qty", 6), ("Price", 10),
]


@click.command("add")
@click.option("--name", required=True, help="Item name.")
@click.option("--category", required=True, type=CATEGORY_CHOICE, help="Item category.")
@click.option(
    "--size", "sizes", required=True, multiple=True,
    help="Size and quantity as 'Size:Qty'. Repeatable.",
)
@click.option("--color", required=True, help="Color.")
@click.option("--price", required=True, help="Unit price (e.g. 100.00).")
@click.option("--description", default=None, help="Optional description.")
def stock_add(
    name: str,
    category: str,
    sizes: tuple[str, ...],
    color: str,
    price: str,
    description: str | None,
) -> None:
    """Add stock for an item in one or more sizes."""
    specs = _parse_sizes(sizes)
    ledger = stock_ledger()

    try:
        result = ledger.add_stock(name, category, specs, color, price, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(result.summary(name))
    for variant in result.created:
        click.echo(f"  new     {variant.size:<6} barcode {variant.barcode}  qty {variant.quantity}")
    for variant in result.updated:
        click.echo(f"  updated {variant.size:<6} barcode {variant.barcode}  qty {variant.quantity}")
    for failure in result.failures:
        click.echo(f"  failed  {failure.size:<6} {failure.error}", err=True)
    try:
        result.raise_for_failures()
    except PartialFailureError as exc:
        raise click.ClickException(str(exc))


@click.command("list")
@click.option("--category", type=CATEGORY_CHOICE, default=None, help="Filter by category.")
@click.option("--search", default=None, help="Match item name or barcode.")
@click.option("--page", default=1, type=int, show_default=True, help="Page number.")
def stock_list(category: str | None, search: str | None, page: int) -> None:
    """List stock, newest first."""
    ledger = stock_ledger()
    try:
        result = ledger.list_variants(
            VariantFilter(category=category, search_text=search),
            page=page,
            page_size=get_settings().page_size,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No inventory items found.")
        return

    echo_table(VARIANT_COLUMNS, (_variant_row(v) for v in result.items))
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total_count} items)")


@click.command("show")
@click.option("--barcode", required=True, help="Barcode to look up.")
def stock_show(barcode: str) -> None:
    """Show the item carrying a barcode."""
    try:
        v = stock_ledger().find_by_barcode(barcode)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{v.id}: {v.item_name}")
    click.echo(f"Category:  {v.category}")
    click.echo(f"Size:      {v.size}")
    click.echo(f"Color:     {v.color}")
    click.echo(f"Barcode:   {v.barcode}")
    click.echo(f"Quantity:  {v.quantity}")
    click.echo(f"Price:     {v.unit_price}")
    if v.description:
        click.echo(f"Notes:     {v.description}")


@click.command("set")
@click.option("--id", "variant_id", required=True, help="Item ID.")
@click.option("--quantity", required=True, type=int, help="New stock count.")
def stock_set(variant_id: str, quantity: int) -> None:
    """Correct the stock count of an item."""
    try:
        variant = stock_ledger().set_quantity(variant_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for item #{variant.id} set to {variant.quantity}")


@click.command("update")
@click.option("--id", "variant_id", required=True, help="Item ID.")
@click.option("--name", required=True, help="Item name.")
@click.option("--category", required=True, type=CATEGORY_CHOICE, help="Item category.")
@click.option("--size", required=True, help="Size.")
@click.option("--color", required=True, help="Color.")
@click.option("--quantity", required=True, type=int, help="Stock count.")
@click.option("--price", required=True, help="Unit price.")
@click.option("--description", default=None, help="Description.")
def stock_update(
    variant_id: str,
    name: str,
    category: str,
    size: str,
    color: str,
    quantity: int,
    price: str,
    description: str | None,
) -> None:
    """Overwrite all details of an item (barcode is kept)."""
    try:
        stock_ledger().update_variant(
            variant_id,
            item_name=name,
            category=category,
            size=size,
            color=color,
            quantity=quantity,
            unit_price=price,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{variant_id} updated.")


@click.command("delete")
@click.option("--id", "variant_id", required=True, help="Item ID.")
@click.confirmation_option(prompt="Delete this item? Deliveries recorded against it are kept.")
def stock_delete(variant_id: str) -> None:
    """Delete an item."""
    try:
        stock_ledger().delete_variant(variant_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{variant_id} deleted.")
