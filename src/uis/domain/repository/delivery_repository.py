"""Abstract repository for DeliveryRecord."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from uis.domain.model.delivery import DeliveryRecord
from uis.domain.model.value_objects import require_aware


@dataclass(frozen=True)
class DeliveryFilter:
    """Half-open delivery-date range plus a customer name substring."""

    start: datetime | None = None  # inclusive
    end: datetime | None = None  # exclusive
    customer_name: str | None = None

    def __post_init__(self) -> None:
        if self.start is not None:
            require_aware(self.start, "start")
        if self.end is not None:
            require_aware(self.end, "end")

    def matches(self, record: DeliveryRecord) -> bool:
        if self.start is not None and record.delivery_date < self.start:
            return False
        if self.end is not None and record.delivery_date >= self.end:
            return False
        if self.customer_name:
            if self.customer_name.lower() not in record.customer_name.lower():
                return False
        return True


class DeliveryRepository(ABC):

    @abstractmethod
    def get_by_id(self, delivery_id: str) -> DeliveryRecord | None:
        """Return a delivery by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[DeliveryRecord]:
        """Return every delivery record."""

    @abstractmethod
    def add(self, record: DeliveryRecord) -> DeliveryRecord:
        """Persist a new delivery and return it with its assigned ID."""

    def find(self, criteria: DeliveryFilter) -> list[DeliveryRecord]:
        return [d for d in self.list_all() if criteria.matches(d)]

    def count_between(self, start: datetime, end: datetime) -> int:
        return len(self.find(DeliveryFilter(start=start, end=end)))
