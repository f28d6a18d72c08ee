"""DeliveryRecord: an immutable fact that stock went to a customer.

A delivery references the variant it was recorded against by id and keeps
a snapshot of the variant's barcode.  Recording a delivery does NOT change
the variant's stock count; stock corrections are a separate ledger
operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from uis.domain.model.value_objects import Quantity, require_aware, require_text
from uis.domain.model.variant import InventoryVariant


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DeliveryRecord:

    variant_id: str
    barcode: str  # snapshot at creation time
    customer_name: str
    quantity_delivered: Quantity
    delivered_by: str
    delivery_date: datetime
    notes: str | None = None
    id: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        variant: InventoryVariant,
        customer_name: str,
        quantity: int,
        delivered_by: str,
        notes: str | None = None,
        delivery_date: datetime | None = None,
        now: datetime | None = None,
    ) -> DeliveryRecord:
        """Build a new delivery against a persisted variant."""
        stamp = now or _now()
        if delivery_date is not None:
            require_aware(delivery_date, "delivery_date")
        cleaned_notes = notes.strip() if notes else None
        return cls(
            variant_id=variant.id,
            barcode=variant.barcode,
            customer_name=require_text(customer_name, "customer_name"),
            quantity_delivered=Quantity(quantity),
            delivered_by=delivered_by,
            delivery_date=delivery_date or stamp,
            notes=cleaned_notes or None,
            created_at=stamp,
            updated_at=stamp,
        )
