from __future__ import annotations

from dataclasses import dataclass
from datetime import date

DELIVERY_COLLECTION = "collection"
DELIVERY_DROPOFF = "dropoff"
DELIVERY_METHODS = (DELIVERY_COLLECTION, DELIVERY_DROPOFF)


@dataclass(frozen=True)
class Booking:
    service_id: str | None = "standard"
    quantity: int = 1
    repaint: bool = False
    delivery_method: str | None = None  # "collection", "dropoff"
    booking_date: date | None = None
    booking_time: str | None = None  # HH:MM
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    pickup_address: str = ""
    notes: str = ""
