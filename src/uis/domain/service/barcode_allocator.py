"""Domain service: Barcode Allocation.

Barcodes are random 12-digit numbers (no leading zero), which keeps them
valid Code128 payloads and leaves roughly 9 x 10^11 candidates.

Generating a candidate and checking it against the store are two separate
steps, so two allocators can pick the same value at the same moment.
The store's uniqueness constraint on insert is what actually guarantees
unique barcodes; ``insert_new`` treats a lost race like any other
collision and draws again, within the same attempt budget.
"""

from __future__ import annotations

import random
from collections.abc import Callable

from uis.domain.exceptions import AllocationExhaustedError, DuplicateBarcodeError
from uis.domain.model.variant import InventoryVariant
from uis.domain.repository.variant_repository import VariantRepository
from uis.logging_config import get_logger

logger = get_logger("domain.barcode_allocator")

BARCODE_MIN = 100_000_000_000
BARCODE_MAX = 999_999_999_999
DEFAULT_MAX_ATTEMPTS = 100


class BarcodeAllocator:

    def __init__(
        self,
        variant_repo: VariantRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        rng: random.Random | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._variant_repo = variant_repo
        self._max_attempts = max_attempts
        self._rng = rng or random.SystemRandom()

    def allocate(self) -> str:
        """Return a barcode not currently present in the store.

        Raises AllocationExhaustedError if every attempt collided.
        """
        for attempt in range(1, self._max_attempts + 1):
            candidate = self._candidate()
            if not self._variant_repo.barcode_exists(candidate):
                return candidate
            logger.warning(
                "Barcode collision, drawing again",
                extra={"barcode": candidate, "attempt": attempt},
            )
        logger.error("Barcode allocation exhausted", extra={"attempts": self._max_attempts})
        raise AllocationExhaustedError(self._max_attempts)

    def insert_new(
        self, build_variant: Callable[[str], InventoryVariant]
    ) -> InventoryVariant:
        """Allocate a barcode, build the variant with it and insert it.

        A DuplicateBarcodeError from the insert means a concurrent
        allocator claimed the same value first; draw again.  Any other
        conflict (e.g. a duplicate name/category/size/color) is the
        caller's to handle.
        """
        for attempt in range(1, self._max_attempts + 1):
            candidate = self._candidate()
            if self._variant_repo.barcode_exists(candidate):
                logger.warning(
                    "Barcode collision, drawing again",
                    extra={"barcode": candidate, "attempt": attempt},
                )
                continue
            try:
                return self._variant_repo.add(build_variant(candidate))
            except DuplicateBarcodeError:
                logger.warning(
                    "Barcode claimed concurrently, drawing again",
                    extra={"barcode": candidate, "attempt": attempt},
                )
        logger.error("Barcode allocation exhausted", extra={"attempts": self._max_attempts})
        raise AllocationExhaustedError(self._max_attempts)

    def _candidate(self) -> str:
        return str(self._rng.randint(BARCODE_MIN, BARCODE_MAX))
