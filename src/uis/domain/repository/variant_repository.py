"""Abstract repository for the InventoryVariant aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (JSON, SQL, in-memory) live in
the infrastructure layer and must provide two store-level guarantees:

- ``add`` rejects a barcode or a name/category/size/color key that is
  already present, atomically with the insert.
- ``update`` runs the mutator and the write as one step, so two callers
  topping up the same variant never lose an increment.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from uis.domain.model.value_objects import Category
from uis.domain.model.variant import InventoryVariant, VariantKey


@dataclass(frozen=True)
class VariantFilter:
    """Selection criteria for listing and exporting variants."""

    category: Category | str | None = None
    search_text: str | None = None
    max_quantity: int | None = None

    def matches(self, variant: InventoryVariant) -> bool:
        if self.category is not None and str(variant.category) != str(self.category):
            return False
        if self.search_text:
            needle = self.search_text.lower()
            if needle not in variant.item_name.lower() and needle not in variant.barcode.lower():
                return False
        if self.max_quantity is not None and variant.quantity > self.max_quantity:
            return False
        return True


class VariantRepository(ABC):

    @abstractmethod
    def get_by_id(self, variant_id: str) -> InventoryVariant | None:
        """Return a variant by its ID, or None if not found."""

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> InventoryVariant | None:
        """Return the variant carrying this barcode, or None."""

    @abstractmethod
    def get_by_key(self, key: VariantKey) -> InventoryVariant | None:
        """Return the variant with this exact name/category/size/color."""

    @abstractmethod
    def list_all(self) -> list[InventoryVariant]:
        """Return every variant."""

    @abstractmethod
    def add(self, variant: InventoryVariant) -> InventoryVariant:
        """Insert a new variant and return it with its assigned ID.

        Raises DuplicateBarcodeError or DuplicateVariantError when the
        uniqueness constraints would be broken.
        """

    @abstractmethod
    def update(
        self,
        variant_id: str,
        mutator: Callable[[InventoryVariant], None],
    ) -> InventoryVariant:
        """Atomically apply ``mutator`` to a stored variant and persist it.

        Raises EntityNotFoundError if the variant does not exist.  If the
        mutator raises, nothing is written.
        """

    @abstractmethod
    def delete(self, variant_id: str) -> bool:
        """Remove a variant.  Returns False if it did not exist."""

    def barcode_exists(self, barcode: str) -> bool:
        return self.get_by_barcode(barcode) is not None

    def find(self, criteria: VariantFilter) -> list[InventoryVariant]:
        """Return the variants matching ``criteria``, in store order."""
        return [v for v in self.list_all() if criteria.matches(v)]
