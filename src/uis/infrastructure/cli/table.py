"""Fixed-width table output shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from typing import Any

import click


def _cell(value: Any) -> str:
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value)


def echo_table(
    columns: Sequence[tuple[str, int]],
    rows: Iterable[Mapping[str, Any]],
) -> None:
    """Print ``rows`` under a header, one ``(column, width)`` pair per column.

    Values wider than their column are cut; numbers are right-aligned.
    """
    header = " ".join(f"{name[:width]:<{width}}" for name, width in columns)
    click.echo(header)
    click.echo("-" * len(header))
    for row in rows:
        cells = []
        for name, width in columns:
            value = row.get(name, "")
            text = _cell(value)[:width]
            if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
                cells.append(f"{text:>{width}}")
            else:
                cells.append(f"{text:<{width}}")
        click.echo(" ".join(cells).rstrip())
