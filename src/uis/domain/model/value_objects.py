"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from uis.domain.exceptions import ValidationError


class Category(Enum):
    """The fixed set of uniform categories accepted at the boundary."""

    T_SHIRT = "T-Shirt"
    JACKET = "Jacket"
    CAP = "Cap"
    TROUSERS = "Trousers"
    UNIFORM = "Uniform"

    @classmethod
    def parse(cls, raw: str | Category) -> Category:
        if isinstance(raw, Category):
            return raw
        for member in cls:
            if member.value == raw:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValidationError(
            f"Unknown category {raw!r} (expected one of: {allowed})",
            field="category",
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """Monetary amount.

    Uses Decimal to avoid floating-point rounding errors in stock value
    and delivery totals.  Zero is allowed: free items are still stock.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}",
                field="unit_price",
            )
        if not self.amount.is_finite():
            raise ValidationError(
                f"Money amount must be finite, got {self.amount}",
                field="unit_price",
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}",
                field="unit_price",
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"Rs {self.amount:.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal | Money) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, Money):
            return amount
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(
                f"Invalid money amount: {amount!r}", field="unit_price"
            ) from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a delivery moves at least one item.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}",
                field="quantity",
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive", field="quantity")

    def __str__(self) -> str:
        return str(self.value)


def require_stock_level(value: int, field: str = "quantity") -> int:
    """Validate a stock count: an integer that is zero or more."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(
            f"Stock quantity must be an integer, got {type(value).__name__}",
            field=field,
        )
    if value < 0:
        raise ValidationError(
            f"Stock quantity cannot be negative, got {value}", field=field
        )
    return value


def require_text(value: str | None, field: str) -> str:
    """Strip and validate a required free-text field."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} is required", field=field)
    return str(value).strip()


def require_aware(value: datetime, field: str) -> datetime:
    """Reject naive datetimes; stored timestamps all carry a timezone."""
    if not isinstance(value, datetime):
        raise ValidationError(f"{field} must be a datetime", field=field)
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(f"{field} must include a timezone", field=field)
    return value
