from __future__ import annotations

from decimal import Decimal

import pytest

from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.application.use_cases.complete_booking import CompleteBookingUseCase
from app.infrastructure.availability.memory_availability import MemoryAvailability
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from app.infrastructure.store.memory_store import (
    MemoryOrderStore,
    MemoryOutbox,
    MemoryWizardStore,
)
from support import OPEN_DAY, OTHER_DAY, TZ, FakePaymentGateway


@pytest.fixture
def catalog():
    return ServiceCatalogStore(repaint_unit_cost=Decimal("20"))


@pytest.fixture
def payments():
    return FakePaymentGateway()


@pytest.fixture
def outbox():
    return MemoryOutbox()


@pytest.fixture
def make_wizard(catalog, payments, outbox):
    def _make(
        orders=None,
        availability=None,
        max_quantity=None,
        store=None,
        session_ttl_seconds=None,
    ) -> BookingWizardUseCase:
        orders = orders if orders is not None else MemoryOrderStore()
        availability = availability if availability is not None else MemoryAvailability(
            {OPEN_DAY: ["09:00", "11:00", "13:00"], OTHER_DAY: ["15:00"]}
        )
        return BookingWizardUseCase(
            store=store if store is not None else MemoryWizardStore(),
            catalog=catalog,
            availability=availability,
            payments=payments,
            complete_booking=CompleteBookingUseCase(orders=orders, availability=availability, outbox=outbox),
            timezone=TZ,
            return_url="http://testserver/book",
            max_quantity=max_quantity,
            session_ttl_seconds=session_ttl_seconds,
        )

    return _make
