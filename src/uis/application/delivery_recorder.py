"""Application service: Delivery Recorder.

Records deliveries against ledger variants.  A delivery is a fact about
what went out the door; it does NOT decrement the variant's stock.  When
stock has to follow a delivery, the caller corrects it explicitly with
``StockLedger.set_quantity``.
"""

from __future__ import annotations

from datetime import datetime

from uis.application.dto import ResolvedDelivery
from uis.application.stock_ledger import Clock, utc_now
from uis.domain.exceptions import EntityNotFoundError
from uis.domain.model.delivery import DeliveryRecord
from uis.domain.model.value_objects import Quantity, require_text
from uis.domain.repository.delivery_repository import DeliveryFilter, DeliveryRepository
from uis.domain.repository.user_repository import UserRepository
from uis.domain.repository.variant_repository import VariantRepository
from uis.logging_config import get_logger

logger = get_logger("application.delivery_recorder")


class DeliveryRecorder:

    def __init__(
        self,
        delivery_repo: DeliveryRepository,
        variant_repo: VariantRepository,
        user_repo: UserRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._delivery_repo = delivery_repo
        self._variant_repo = variant_repo
        self._user_repo = user_repo
        self._clock = clock

    def record_delivery(
        self,
        variant_id: str,
        customer_name: str,
        quantity: int,
        delivered_by: str,
        notes: str | None = None,
        delivery_date: datetime | None = None,
    ) -> DeliveryRecord:
        """Record that ``quantity`` of a variant went to ``customer_name``.

        ``delivered_by`` is the acting user's id, supplied by the caller's
        session layer.
        """
        Quantity(quantity)
        require_text(customer_name, "customer_name")

        variant = self._variant_repo.get_by_id(variant_id)
        if variant is None:
            raise EntityNotFoundError("Variant", variant_id)
        if self._user_repo.get_by_id(delivered_by) is None:
            raise EntityNotFoundError("User", delivered_by)

        record = self._delivery_repo.add(
            DeliveryRecord.create(
                variant=variant,
                customer_name=customer_name,
                quantity=quantity,
                delivered_by=delivered_by,
                notes=notes,
                delivery_date=delivery_date,
                now=self._clock(),
            )
        )
        logger.info(
            "Delivery recorded",
            extra={
                "delivery_id": record.id,
                "variant_id": variant_id,
                "barcode": record.barcode,
                "quantity": quantity,
            },
        )
        return record

    def list_deliveries(
        self, criteria: DeliveryFilter | None = None
    ) -> list[ResolvedDelivery]:
        """Matching deliveries, newest delivery date first.

        Deliveries whose variant or user has since been deleted are
        left out rather than reported as errors.
        """
        records = self._delivery_repo.find(criteria or DeliveryFilter())
        records.sort(key=lambda d: d.delivery_date, reverse=True)

        resolved: list[ResolvedDelivery] = []
        for record in records:
            variant = self._variant_repo.get_by_id(record.variant_id)
            user = self._user_repo.get_by_id(record.delivered_by)
            if variant is None or user is None:
                logger.debug("Skipping dangling delivery", extra={"delivery_id": record.id})
                continue
            resolved.append(ResolvedDelivery(delivery=record, variant=variant, user=user))
        return resolved

    def count_in_range(self, start: datetime, end: datetime) -> int:
        """Number of deliveries with ``start <= delivery_date < end``."""
        return self._delivery_repo.count_between(start, end)
