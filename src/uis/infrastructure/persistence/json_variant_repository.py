"""JSON-file-backed implementation of VariantRepository."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from uis.domain.exceptions import (
    DuplicateBarcodeError,
    DuplicateVariantError,
    EntityNotFoundError,
)
from uis.domain.model.value_objects import Category, Money
from uis.domain.model.variant import InventoryVariant, VariantKey
from uis.domain.repository.variant_repository import VariantRepository
from uis.infrastructure.persistence.json_store import JsonFileStore


class JsonVariantRepository(VariantRepository):

    def __init__(self, file_path: Path) -> None:
        self._store = JsonFileStore(file_path)

    # --- VariantRepository interface ------------------------------------------

    def get_by_id(self, variant_id: str) -> InventoryVariant | None:
        return self._first(lambda raw: raw["id"] == variant_id)

    def get_by_barcode(self, barcode: str) -> InventoryVariant | None:
        return self._first(lambda raw: raw["barcode"] == barcode)

    def get_by_key(self, key: VariantKey) -> InventoryVariant | None:
        return self._first(lambda raw: self._raw_key(raw) == key)

    def list_all(self) -> list[InventoryVariant]:
        return [self._to_domain(raw) for raw in self._store.load()]

    def add(self, variant: InventoryVariant) -> InventoryVariant:
        with self._store.lock:
            records = self._store.load()
            for raw in records:
                if raw["barcode"] == variant.barcode:
                    raise DuplicateBarcodeError(variant.barcode)
                if self._raw_key(raw) == variant.key:
                    raise DuplicateVariantError(variant.key)
            variant.id = self._store.next_id()
            records.append(self._to_raw(variant))
            self._store.persist(records)
        return variant

    def update(
        self,
        variant_id: str,
        mutator: Callable[[InventoryVariant], None],
    ) -> InventoryVariant:
        with self._store.lock:
            records = self._store.load()
            for i, raw in enumerate(records):
                if raw["id"] == variant_id:
                    break
            else:
                raise EntityNotFoundError("Variant", variant_id)

            variant = self._to_domain(raw)
            barcode = variant.barcode
            mutator(variant)
            variant.barcode = barcode
            for other in records:
                if other["id"] != variant_id and self._raw_key(other) == variant.key:
                    raise DuplicateVariantError(variant.key)
            records[i] = self._to_raw(variant)
            self._store.persist(records)
        return variant

    def delete(self, variant_id: str) -> bool:
        with self._store.lock:
            records = self._store.load()
            kept = [raw for raw in records if raw["id"] != variant_id]
            if len(kept) == len(records):
                return False
            self._store.persist(kept)
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _raw_key(raw: dict) -> VariantKey:
        return (raw["item_name"], raw["category"], raw["size"], raw["color"])

    @staticmethod
    def _to_raw(variant: InventoryVariant) -> dict:
        return {
            "id": variant.id,
            "item_name": variant.item_name,
            "category": variant.category.value,
            "size": variant.size,
            "color": variant.color,
            "barcode": variant.barcode,
            "quantity": variant.quantity,
            "unit_price": str(variant.unit_price.amount),
            "description": variant.description,
            "created_at": variant.created_at.isoformat(),
            "updated_at": variant.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> InventoryVariant:
        return InventoryVariant(
            id=raw["id"],
            item_name=raw["item_name"],
            category=Category(raw["category"]),
            size=raw["size"],
            color=raw["color"],
            barcode=raw["barcode"],
            quantity=raw["quantity"],
            unit_price=Money.of(raw["unit_price"]),
            description=raw.get("description"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- Internal helpers -----------------------------------------------------

    def _first(self, predicate: Callable[[dict], bool]) -> InventoryVariant | None:
        for raw in self._store.load():
            if predicate(raw):
                return self._to_domain(raw)
        return None
