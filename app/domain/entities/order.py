from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from app.domain.entities.booking import Booking

STATUS_PENDING = "Pending"
STATUS_IN_PROGRESS = "In Progress"
STATUS_COMPLETED = "Completed"
STATUS_CANCELLED = "Cancelled"

ORDER_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED)
ACTIVE_STATUSES = (STATUS_PENDING, STATUS_IN_PROGRESS)


@dataclass(frozen=True)
class Order:
    id: str
    customer_name: str
    email: str
    service_id: str
    service_name: str
    quantity: int
    repaint: bool
    delivery_method: str
    booking_date: date
    booking_time: str
    total_cost: Decimal
    payment_ref: str
    status: str = STATUS_PENDING
    phone_number: str = ""
    pickup_address: str = ""
    notes: str = ""
    created_at: datetime | None = None


def order_from_booking(
    order_id: str,
    booking: Booking,
    total_cost: Decimal,
    service_name: str,
    payment_ref: str,
    created_at: datetime,
) -> Order:
    if booking.booking_date is None or not booking.booking_time:
        raise ValueError("An order needs a booking date and time")
    return Order(
        id=order_id,
        customer_name=booking.full_name,
        email=booking.email,
        service_id=booking.service_id or "",
        service_name=service_name,
        quantity=booking.quantity,
        repaint=booking.repaint,
        delivery_method=booking.delivery_method or "",
        booking_date=booking.booking_date,
        booking_time=booking.booking_time,
        total_cost=total_cost,
        payment_ref=payment_ref,
        phone_number=booking.phone_number,
        pickup_address=booking.pickup_address,
        notes=booking.notes,
        created_at=created_at,
    )
