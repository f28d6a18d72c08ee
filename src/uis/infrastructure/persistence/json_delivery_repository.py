"""JSON-file-backed implementation of DeliveryRepository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path

from uis.domain.model.delivery import DeliveryRecord
from uis.domain.model.value_objects import Quantity
from uis.domain.repository.delivery_repository import DeliveryRepository
from uis.infrastructure.persistence.json_store import JsonFileStore


class JsonDeliveryRepository(DeliveryRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- DeliveryRepository interface -----------------------------------------

    def get_by_id(self, delivery_id: str) -> DeliveryRecord | None:
        for raw in self._store.load():
            if raw["id"] == delivery_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[DeliveryRecord]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def add(self, record: DeliveryRecord) -> DeliveryRecord:
        with self._store.lock:
            records = self._store.load()
            saved = replace(record, id=self._store.next_id())
            records.append(self._to_raw(saved))
            self._store.persist(records)
        return saved

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(record: DeliveryRecord) -> dict:
        return {
            "id": record.id,
            "variant_id": record.variant_id,
            "barcode": record.barcode,
            "customer_name": record.customer_name,
            "quantity_delivered": record.quantity_delivered.value,
            "delivered_by": record.delivered_by,
            "delivery_date": record.delivery_date.isoformat(),
            "notes": record.notes,
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> DeliveryRecord:
        return DeliveryRecord(
            id=raw["id"],
            variant_id=raw["variant_id"],
            barcode=raw["barcode"],
            customer_name=raw["customer_name"],
            quantity_delivered=Quantity(raw["quantity_delivered"]),
            delivered_by=raw["delivered_by"],
            delivery_date=datetime.fromisoformat(raw["delivery_date"]),
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
