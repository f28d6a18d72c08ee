import click

from uis.infrastructure.cli.delivery_commands import delivery_list, delivery_record
from uis.infrastructure.cli.report_commands import (
    report_dashboard,
    report_deliveries,
    report_inventory,
)
from uis.infrastructure.cli.stock_commands import (
    stock_add,
    stock_delete,
    stock_list,
    stock_set,
    stock_show,
    stock_update,
)
from uis.infrastructure.config import get_settings
from uis.logging_config import configure_logging


@click.group()
def cli() -> None:
    """UIS: Uniform Inventory & Delivery System"""
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.json_logs)


@cli.group()
def stock() -> None:
    """Manage stock."""


@cli.group()
def delivery() -> None:
    """Record and list deliveries."""


@cli.group()
def report() -> None:
    """Dashboard and reports."""


# Register subcommands
stock.add_command(stock_add)
stock.add_command(stock_delete)
stock.add_command(stock_list)
stock.add_command(stock_set)
stock.add_command(stock_show)
stock.add_command(stock_update)
delivery.add_command(delivery_list)
delivery.add_command(delivery_record)
report.add_command(report_dashboard)
report.add_command(report_deliveries)
report.add_command(report_inventory)
