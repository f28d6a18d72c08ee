"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are read on
each call so the data directory can be switched per invocation.
"""

from __future__ import annotations

from uis.application.delivery_recorder import DeliveryRecorder
from uis.application.report_aggregator import ReportAggregator
from uis.application.stock_ledger import StockLedger
from uis.domain.service.barcode_allocator import BarcodeAllocator
from uis.infrastructure.config import Settings, get_settings
from uis.infrastructure.persistence.json_delivery_repository import (
    JsonDeliveryRepository,
)
from uis.infrastructure.persistence.json_user_repository import JsonUserRepository
from uis.infrastructure.persistence.json_variant_repository import (
    JsonVariantRepository,
)


def variant_repository(settings: Settings | None = None) -> JsonVariantRepository:
    settings = settings or get_settings()
    return JsonVariantRepository(settings.data_dir / "variants.json")


def delivery_repository(settings: Settings | None = None) -> JsonDeliveryRepository:
    settings = settings or get_settings()
    return JsonDeliveryRepository(settings.data_dir / "deliveries.json")


def user_repository(settings: Settings | None = None) -> JsonUserRepository:
    settings = settings or get_settings()
    return JsonUserRepository(settings.data_dir / "users.json")


def stock_ledger(settings: Settings | None = None) -> StockLedger:
    settings = settings or get_settings()
    variants = variant_repository(settings)
    allocator = BarcodeAllocator(variants, max_attempts=settings.barcode_max_attempts)
    return StockLedger(variants, allocator)


def delivery_recorder(settings: Settings | None = None) -> DeliveryRecorder:
    settings = settings or get_settings()
    return DeliveryRecorder(
        delivery_repo=delivery_repository(settings),
        variant_repo=variant_repository(settings),
        user_repo=user_repository(settings),
    )


def report_aggregator(settings: Settings | None = None) -> ReportAggregator:
    settings = settings or get_settings()
    return ReportAggregator(
        ledger=stock_ledger(settings),
        deliveries=delivery_recorder(settings),
        low_stock_threshold=settings.low_stock_threshold,
    )
