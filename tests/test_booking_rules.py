"""
Tests for step-scoped booking validation.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.application.utils.booking_rules import MESSAGES, STEP_FIELDS, is_valid_email, validate_fields
from app.domain.entities.booking import Booking
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore

CATALOG = ServiceCatalogStore(repaint_unit_cost=Decimal("20"))
DETAILS = STEP_FIELDS[3]


def _details(**kwargs) -> Booking:
    base = dict(full_name="Jordan Smith", email="jordan@example.com")
    base.update(kwargs)
    return Booking(**base)


def test_dropoff_needs_no_pickup_address():
    booking = _details(delivery_method="dropoff", pickup_address="")

    assert validate_fields(booking, DETAILS, CATALOG) == {}


def test_collection_accepts_ten_character_address():
    """'12 High St' is exactly ten characters."""
    booking = _details(delivery_method="collection", pickup_address="12 High St")

    assert validate_fields(booking, DETAILS, CATALOG) == {}


def test_collection_rejects_short_address():
    booking = _details(delivery_method="collection", pickup_address="Flat 2")

    errors = validate_fields(booking, DETAILS, CATALOG)

    assert errors == {"pickup_address": "Please enter a valid pickup address."}


def test_name_and_email_rules():
    booking = _details(full_name="J", email="not-an-email", delivery_method="dropoff")

    errors = validate_fields(booking, DETAILS, CATALOG)

    assert errors["full_name"] == MESSAGES["full_name"]
    assert errors["email"] == MESSAGES["email"]
    assert "phone_number" not in errors


def test_only_named_fields_are_checked():
    """An empty booking passes step 1's checks when only service and quantity are validated."""
    booking = Booking()

    assert validate_fields(booking, STEP_FIELDS[0], CATALOG) == {}
    assert "delivery_method" in validate_fields(booking, STEP_FIELDS[1], CATALOG)


def test_unknown_service_is_rejected():
    errors = validate_fields(Booking(service_id="deluxe"), STEP_FIELDS[0], CATALOG)

    assert errors == {"service_id": MESSAGES["service_id"]}


def test_quantity_bounds():
    assert "quantity" in validate_fields(Booking(quantity=0), STEP_FIELDS[0], CATALOG)
    assert validate_fields(Booking(quantity=50), STEP_FIELDS[0], CATALOG) == {}

    errors = validate_fields(Booking(quantity=11), STEP_FIELDS[0], CATALOG, max_quantity=10)
    assert errors == {"quantity": "Quantity must be at most 10."}


def test_time_must_be_offered_for_the_date():
    booking = Booking(booking_date=date(2030, 5, 1), booking_time="11:00")

    assert validate_fields(booking, STEP_FIELDS[2], CATALOG, available_times=("09:00", "11:00")) == {}

    errors = validate_fields(booking, STEP_FIELDS[2], CATALOG, available_times=("09:00",))
    assert errors == {"booking_time": MESSAGES["booking_time"]}


def test_missing_date_and_time():
    errors = validate_fields(Booking(), STEP_FIELDS[2], CATALOG)

    assert set(errors) == {"booking_date", "booking_time"}


def test_email_check():
    assert is_valid_email("jordan@example.com")
    assert not is_valid_email("")
    assert not is_valid_email("jordan@")
