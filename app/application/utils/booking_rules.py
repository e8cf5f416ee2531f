from __future__ import annotations

from pydantic import EmailStr, TypeAdapter, ValidationError

from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.booking import DELIVERY_COLLECTION, DELIVERY_METHODS, Booking

MIN_NAME_LENGTH = 2
MIN_PICKUP_ADDRESS_LENGTH = 10

MESSAGES = {
    "service_id": "Please select a service.",
    "quantity": "Quantity must be at least 1.",
    "delivery_method": "Please select a delivery method.",
    "booking_date": "Please select a date.",
    "booking_time": "Please select a time.",
    "full_name": "Full name is required.",
    "email": "Please enter a valid email address.",
    "pickup_address": "Please enter a valid pickup address.",
}

# Fields validated when leaving each step, by step index
STEP_FIELDS: dict[int, tuple[str, ...]] = {
    0: ("service_id", "quantity"),
    1: ("delivery_method",),
    2: ("booking_date", "booking_time"),
    3: ("full_name", "email", "pickup_address", "phone_number"),
    4: (),
}

_email_adapter = TypeAdapter(EmailStr)


def is_valid_email(value: str) -> bool:
    if not value:
        return False
    try:
        _email_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def requires_pickup_address(booking: Booking) -> bool:
    return booking.delivery_method == DELIVERY_COLLECTION


def validate_fields(
    booking: Booking,
    fields: tuple[str, ...],
    catalog: ServiceCatalogPort,
    available_times: tuple[str, ...] | list[str] = (),
    max_quantity: int | None = None,
) -> dict[str, str]:
    """
    Validate only the named fields of a booking.
    Returns {field: message}; empty when every field passes.
    """
    errors: dict[str, str] = {}

    for name in fields:
        if name == "service_id":
            if not booking.service_id or catalog.get_service(booking.service_id) is None:
                errors[name] = MESSAGES[name]
        elif name == "quantity":
            if booking.quantity < 1:
                errors[name] = MESSAGES[name]
            elif max_quantity is not None and booking.quantity > max_quantity:
                errors[name] = f"Quantity must be at most {max_quantity}."
        elif name == "delivery_method":
            if booking.delivery_method not in DELIVERY_METHODS:
                errors[name] = MESSAGES[name]
        elif name == "booking_date":
            if booking.booking_date is None:
                errors[name] = MESSAGES[name]
        elif name == "booking_time":
            if not booking.booking_time or booking.booking_time not in available_times:
                errors[name] = MESSAGES[name]
        elif name == "full_name":
            if len(booking.full_name.strip()) < MIN_NAME_LENGTH:
                errors[name] = MESSAGES[name]
        elif name == "email":
            if not is_valid_email(booking.email.strip()):
                errors[name] = MESSAGES[name]
        elif name == "pickup_address":
            if requires_pickup_address(booking) and len(booking.pickup_address) < MIN_PICKUP_ADDRESS_LENGTH:
                errors[name] = MESSAGES[name]
        # phone_number is optional and free-form

    return errors
