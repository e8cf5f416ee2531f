from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from app.domain.entities.booking import Booking

OUTBOX_PENDING = "pending"
OUTBOX_DONE = "done"


@dataclass(frozen=True)
class OutboxEntry:
    """Side effects owed for one successful payment.

    Keyed by payment reference, so a payment yields at most one order and one
    slot removal no matter how many times the entry is processed.
    """

    payment_ref: str
    booking: Booking
    total_cost: Decimal
    service_name: str
    status: str = OUTBOX_PENDING
    order_id: str | None = None
    order_written: bool = False
    slot_removed: bool = False
    attempts: int = 0
    last_error: str | None = None
    created_at: float | None = None
    updated_at: float | None = None
