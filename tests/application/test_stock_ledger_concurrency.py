"""Concurrent stock additions must never lose an increment or duplicate a variant."""

import random
import threading

from uis.application.stock_ledger import StockLedger
from uis.domain.service.barcode_allocator import BarcodeAllocator
from tests.fakes import FakeVariantRepository

KEY = ("Shirt", "Uniform", "M", "Blue")


def _run_concurrently(ledger: StockLedger, quantities: list[int]) -> list:
    barrier = threading.Barrier(len(quantities))
    results = [None] * len(quantities)

    def worker(i: int, qty: int) -> None:
        barrier.wait()
        results[i] = ledger.add_stock("Shirt", "Uniform", [("M", qty)], "Blue", "100")

    threads = [threading.Thread(target=worker, args=(i, q)) for i, q in enumerate(quantities)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10)
    return results


def _ledger(repo: FakeVariantRepository, seed: int) -> StockLedger:
    return StockLedger(repo, BarcodeAllocator(repo, rng=random.Random(seed)))


class TestConcurrentAddStock:

    def test_two_additions_to_existing_variant(self):
        repo = FakeVariantRepository()
        _ledger(repo, 1).add_stock("Shirt", "Uniform", [("M", 10)], "Blue", "100")

        results = _run_concurrently(_ledger(repo, 2), [3, 4])

        assert repo.get_by_key(KEY).quantity == 17
        assert all(r.ok for r in results)
        assert len(repo.list_all()) == 1

    def test_many_additions_to_new_variant(self):
        repo = FakeVariantRepository()

        quantities = [1, 2, 3, 4, 5, 6, 7, 8]
        results = _run_concurrently(_ledger(repo, 3), quantities)

        assert len(repo.list_all()) == 1
        assert repo.get_by_key(KEY).quantity == sum(quantities)
        assert sum(len(r.created) for r in results) == 1
        assert sum(len(r.updated) for r in results) == len(quantities) - 1
