"""Unit tests for DeliveryRecord."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from uis.domain.exceptions import ValidationError
from uis.domain.model.delivery import DeliveryRecord
from uis.domain.model.variant import InventoryVariant

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _variant() -> InventoryVariant:
    v = InventoryVariant.create(
        item_name="Shirt", category="Uniform", size="M", color="Blue",
        barcode="555555555555", quantity=8, unit_price="100",
    )
    v.id = "7"
    return v


class TestDeliveryRecordCreate:

    def test_snapshots_variant_reference(self):
        d = DeliveryRecord.create(_variant(), "Customer A", 2, "u1", now=NOW)
        assert d.variant_id == "7"
        assert d.barcode == "555555555555"
        assert d.quantity_delivered.value == 2
        assert d.delivered_by == "u1"

    def test_delivery_date_defaults_to_creation_time(self):
        d = DeliveryRecord.create(_variant(), "Customer A", 2, "u1", now=NOW)
        assert d.delivery_date == NOW
        assert d.created_at == NOW

    def test_explicit_delivery_date_kept(self):
        when = datetime(2026, 2, 27, tzinfo=timezone.utc)
        d = DeliveryRecord.create(_variant(), "Customer A", 2, "u1", delivery_date=when, now=NOW)
        assert d.delivery_date == when

    def test_customer_and_notes_trimmed(self):
        d = DeliveryRecord.create(_variant(), "  Customer A ", 1, "u1", notes="  ", now=NOW)
        assert d.customer_name == "Customer A"
        assert d.notes is None

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            DeliveryRecord.create(_variant(), "Customer A", 0, "u1")

    def test_blank_customer_rejected(self):
        with pytest.raises(ValidationError, match="Customer name is required"):
            DeliveryRecord.create(_variant(), " ", 1, "u1")

    def test_naive_delivery_date_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            DeliveryRecord.create(
                _variant(), "Customer A", 1, "u1",
                delivery_date=datetime(2026, 3, 1, 10, 0), now=NOW,
            )
        assert exc_info.value.field == "delivery_date"

    def test_record_is_immutable(self):
        d = DeliveryRecord.create(_variant(), "Customer A", 1, "u1")
        with pytest.raises(FrozenInstanceError):
            d.customer_name = "Someone else"
