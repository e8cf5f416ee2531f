"""
Tests for booking price calculation.
"""

from __future__ import annotations

from decimal import Decimal

from app.application.utils.pricing import quote_booking, to_minor_units
from app.domain.entities.booking import Booking
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore


def test_standard_two_pairs_with_repaint():
    """Standard x2 with repaint: 60 for the clean, 40 for repaint, 100 total."""
    catalog = ServiceCatalogStore(repaint_unit_cost=Decimal("20"))
    booking = Booking(service_id="standard", quantity=2, repaint=True)

    quote = quote_booking(booking, catalog.get_service("standard"), catalog.get_repaint_unit_cost())

    assert quote.unit_price == Decimal("30")
    assert quote.subtotal == Decimal("60")
    assert quote.repaint_total == Decimal("40")
    assert quote.total == Decimal("100")
    assert to_minor_units(quote.total) == 10000


def test_repaint_off_adds_nothing():
    catalog = ServiceCatalogStore(repaint_unit_cost=Decimal("20"))
    booking = Booking(service_id="sameday", quantity=3, repaint=False)

    quote = quote_booking(booking, catalog.get_service("sameday"), catalog.get_repaint_unit_cost())

    assert quote.repaint_total == Decimal("0")
    assert quote.total == Decimal("150")


def test_unknown_service_prices_at_zero():
    """No service selected yet: the running total shows only what is known."""
    booking = Booking(service_id=None, quantity=1, repaint=True)

    quote = quote_booking(booking, None, Decimal("20"))

    assert quote.subtotal == Decimal("0")
    assert quote.total == Decimal("20")


def test_quantity_below_one_is_priced_as_one():
    catalog = ServiceCatalogStore(repaint_unit_cost=Decimal("20"))
    booking = Booking(service_id="express", quantity=0)

    quote = quote_booking(booking, catalog.get_service("express"), catalog.get_repaint_unit_cost())

    assert quote.quantity == 1
    assert quote.total == Decimal("40")


def test_minor_units_round_half_up():
    assert to_minor_units(Decimal("12.345")) == 1235
    assert to_minor_units(Decimal("0.004")) == 0
    assert to_minor_units(Decimal("30")) == 3000


def test_catalog_lists_all_three_tiers():
    catalog = ServiceCatalogStore(repaint_unit_cost=Decimal("20"))

    services = catalog.list_services()

    assert [s.id for s in services] == ["standard", "express", "sameday"]
    assert catalog.get_service("sameday").name == "Same-Day VIP"
    assert catalog.get_service("deluxe") is None
