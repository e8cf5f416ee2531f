from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.domain.entities.booking import Booking
from app.domain.entities.service_catalog import Service


@dataclass(frozen=True)
class Quote:
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    repaint_total: Decimal
    total: Decimal


def quote_booking(booking: Booking, service: Service | None, repaint_unit_cost: Decimal) -> Quote:
    """Price a booking: unit price x quantity, plus the repaint add-on per pair when selected."""
    quantity = max(1, booking.quantity)
    unit_price = service.price if service else Decimal("0")
    subtotal = unit_price * quantity
    repaint_total = repaint_unit_cost * quantity if booking.repaint else Decimal("0")
    return Quote(
        unit_price=unit_price,
        quantity=quantity,
        subtotal=subtotal,
        repaint_total=repaint_total,
        total=subtotal + repaint_total,
    )


def to_minor_units(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
