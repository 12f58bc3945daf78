"""
Tests for listing cache invalidation.
"""

import asyncio
import pytest

from app.routers.invoices import list_invoices
from app.routers.properties import list_properties
from app.services.invoice import InvoiceService
from app.services.property import PropertyService
from app.services.revalidation import ListingCache, ViewInvalidator
from tests.conftest import InMemoryStore, InvoiceFactory, PropertyFactory


def slow_listing(store: InMemoryStore, reading: asyncio.Event, release: asyncio.Event):
    """Wrap a store's listing read so it pauses until released."""
    read = store.get_multi

    async def get_multi(skip: int = 0, limit: int = 100):
        rows = await read(skip=skip, limit=limit)
        reading.set()
        await release.wait()
        return rows

    return get_multi


class TestListingCache:

    def test_set_get_and_mark_stale(self):
        cache = ListingCache()
        cache.set("/dashboard/invoices", {"total": 1})

        assert cache.get("/dashboard/invoices") == {"total": 1}
        assert "/dashboard/invoices" in cache

        cache.mark_stale("/dashboard/invoices")

        assert cache.get("/dashboard/invoices") is None
        assert "/dashboard/invoices" not in cache

    def test_mark_stale_unknown_path(self):
        cache = ListingCache()
        cache.mark_stale("/nowhere")
        assert cache.get("/nowhere") is None

    def test_mark_stale_bumps_generation(self):
        cache = ListingCache()
        assert cache.generation("/dashboard/invoices") == 0

        cache.mark_stale("/dashboard/invoices")
        cache.mark_stale("/dashboard/invoices")

        assert cache.generation("/dashboard/invoices") == 2
        assert cache.generation("/dashboard/properties") == 0

    def test_set_with_current_generation(self):
        cache = ListingCache()
        generation = cache.generation("/dashboard/invoices")

        assert cache.set("/dashboard/invoices", {"total": 1}, generation=generation)
        assert cache.get("/dashboard/invoices") == {"total": 1}

    def test_set_rejects_payload_read_before_invalidation(self):
        cache = ListingCache()
        generation = cache.generation("/dashboard/invoices")
        cache.mark_stale("/dashboard/invoices")

        stored = cache.set("/dashboard/invoices", {"total": 0}, generation=generation)

        assert stored is False
        assert "/dashboard/invoices" not in cache

    def test_clear_keeps_generations(self):
        cache = ListingCache()
        cache.mark_stale("/dashboard/invoices")
        cache.set("/dashboard/invoices", {"total": 1})

        cache.clear()

        assert "/dashboard/invoices" not in cache
        assert cache.generation("/dashboard/invoices") == 1


class TestViewInvalidator:

    def test_revalidate_only_touches_given_path(self):
        invalidator = ViewInvalidator()
        invalidator.cache.set("/dashboard/invoices", [])
        invalidator.cache.set("/dashboard/properties", [])

        result = invalidator.revalidate_path("/dashboard/invoices")

        assert result is None
        assert "/dashboard/invoices" not in invalidator.cache
        assert "/dashboard/properties" in invalidator.cache

    def test_listeners_notified(self):
        invalidator = ViewInvalidator()
        seen = []
        invalidator.subscribe(seen.append)

        invalidator.revalidate_path("/dashboard/properties")
        invalidator.unsubscribe(seen.append)
        invalidator.revalidate_path("/dashboard/properties")

        assert seen == ["/dashboard/properties"]

    def test_failing_listener_is_contained(self, caplog):
        invalidator = ViewInvalidator()
        seen = []

        def broken(path):
            raise RuntimeError("boom")

        invalidator.subscribe(broken)
        invalidator.subscribe(seen.append)

        invalidator.revalidate_path("/dashboard/invoices")

        assert seen == ["/dashboard/invoices"]
        assert "Revalidation listener failed" in caplog.text


class TestListingReadDuringMutation:
    """A listing read overlapping a mutation must not repopulate the cache with stale rows."""

    @pytest.mark.asyncio
    async def test_invoice_listing_read_overlapping_create(
        self,
        invoice_service: InvoiceService,
        invoice_store: InMemoryStore,
        invalidator: ViewInvalidator,
        monkeypatch
    ):
        reading, release = asyncio.Event(), asyncio.Event()
        monkeypatch.setattr(invoice_store, "get_multi", slow_listing(invoice_store, reading, release))

        listing = asyncio.create_task(list_invoices(invoice_service=invoice_service, invalidator=invalidator))
        await reading.wait()
        state = await invoice_service.create_invoice(InvoiceFactory.form())
        release.set()
        stale = await listing

        assert state.redirect_to == "/dashboard/invoices"
        assert stale["total"] == 0
        assert "/dashboard/invoices" not in invalidator.cache

        monkeypatch.undo()
        fresh = await list_invoices(invoice_service=invoice_service, invalidator=invalidator)

        assert fresh["total"] == 1
        assert invalidator.cache.get("/dashboard/invoices") == fresh

    @pytest.mark.asyncio
    async def test_property_listing_read_overlapping_delete(
        self,
        property_service: PropertyService,
        property_store: InMemoryStore,
        invalidator: ViewInvalidator,
        monkeypatch
    ):
        await property_service.create_property(PropertyFactory.form())
        [property_id] = property_store.rows
        reading, release = asyncio.Event(), asyncio.Event()
        monkeypatch.setattr(property_store, "get_multi", slow_listing(property_store, reading, release))

        listing = asyncio.create_task(list_properties(property_service=property_service, invalidator=invalidator))
        await reading.wait()
        await property_service.delete_property(property_id)
        release.set()
        stale = await listing

        assert stale["total"] == 1
        assert "/dashboard/properties" not in invalidator.cache

    @pytest.mark.asyncio
    async def test_listing_read_without_mutation_is_cached(
        self, invoice_service: InvoiceService, invalidator: ViewInvalidator
    ):
        await invoice_service.create_invoice(InvoiceFactory.form())

        first = await list_invoices(invoice_service=invoice_service, invalidator=invalidator)

        assert first["total"] == 1
        assert invalidator.cache.get("/dashboard/invoices") == first
