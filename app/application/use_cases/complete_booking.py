from __future__ import annotations

import logging
import time
from dataclasses import dataclass, replace
from decimal import Decimal

from app.application.ports.availability import AvailabilityPort
from app.application.ports.order_store import OrderStorePort
from app.application.ports.outbox import OutboxPort
from app.domain.entities.booking import Booking
from app.domain.entities.outbox import OUTBOX_DONE, OUTBOX_PENDING, OutboxEntry
from app.domain.entities.toast import Toast

BOOKING_FAILED_TOAST = Toast(
    title="Booking Failed",
    description="Your payment was successful, but we failed to save your booking. Please contact support.",
)
AVAILABILITY_WARNING_TOAST = Toast(
    title="Availability Warning",
    description="Order was created, but failed to update availability. Please manually remove the time slot.",
)


@dataclass(frozen=True)
class CompletionResult:
    entry: OutboxEntry
    toasts: list[Toast]

    @property
    def order_id(self) -> str | None:
        return self.entry.order_id if self.entry.order_written else None


class CompleteBookingUseCase:
    """
    Runs the side effects owed after a successful payment.

    The payment is first recorded in the outbox, then the order is written and
    the booked slot removed, in that order. A failing step leaves the entry
    pending so a later drain() picks it up where it stopped.
    """

    def __init__(
        self,
        orders: OrderStorePort,
        availability: AvailabilityPort,
        outbox: OutboxPort,
    ) -> None:
        self._orders = orders
        self._availability = availability
        self._outbox = outbox
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        booking: Booking,
        total_cost: Decimal,
        service_name: str,
        payment_ref: str,
    ) -> CompletionResult:
        now = time.time()
        entry = self._outbox.add(
            OutboxEntry(
                payment_ref=payment_ref,
                booking=booking,
                total_cost=total_cost,
                service_name=service_name,
                created_at=now,
                updated_at=now,
            )
        )
        entry = self.process(entry)

        toasts: list[Toast] = []
        if not entry.order_written:
            toasts.append(BOOKING_FAILED_TOAST)
        elif not entry.slot_removed:
            toasts.append(AVAILABILITY_WARNING_TOAST)
        return CompletionResult(entry=entry, toasts=toasts)

    def process(self, entry: OutboxEntry) -> OutboxEntry:
        # A confirm re-submit and a drain can both reach the same entry
        with self._outbox.lock(entry.payment_ref):
            entry = self._outbox.get(entry.payment_ref) or entry
            return self._process(entry)

    def _process(self, entry: OutboxEntry) -> OutboxEntry:
        if entry.status == OUTBOX_DONE:
            return entry

        if not entry.order_written:
            try:
                # An earlier attempt may have written the order but crashed before saving the flag
                existing = self._orders.find_by_payment_ref(entry.payment_ref)
                if existing is not None:
                    order_id = existing.id
                else:
                    order_id = self._orders.create_order(
                        entry.booking,
                        entry.total_cost,
                        entry.service_name,
                        entry.payment_ref,
                    )
            except Exception as e:
                self._logger.exception(
                    "Order write failed after payment",
                    extra={"payment_ref": entry.payment_ref, "reason": str(e)},
                )
                return self._fail(entry, f"order write failed: {e}")

            entry = replace(entry, order_id=order_id, order_written=True, updated_at=time.time())
            self._outbox.save(entry)
            self._logger.info("Order created", extra={"order_id": order_id, "payment_ref": entry.payment_ref})

        if not entry.slot_removed:
            booking = entry.booking
            try:
                if booking.booking_date is not None and booking.booking_time:
                    self._availability.remove_slot(booking.booking_date, booking.booking_time)
            except Exception as e:
                self._logger.exception(
                    "Slot removal failed; remove the slot manually",
                    extra={
                        "order_id": entry.order_id,
                        "booking_date": booking.booking_date,
                        "booking_time": booking.booking_time,
                        "reason": str(e),
                    },
                )
                return self._fail(entry, f"slot removal failed: {e}")

            entry = replace(entry, slot_removed=True, updated_at=time.time())

        entry = replace(entry, status=OUTBOX_DONE, last_error=None, updated_at=time.time())
        self._outbox.save(entry)
        return entry

    def drain(self) -> list[OutboxEntry]:
        """Retry every pending entry once. Returns the entries after processing."""
        processed = [self.process(entry) for entry in self._outbox.list_pending()]
        still_pending = sum(1 for entry in processed if entry.status == OUTBOX_PENDING)
        self._logger.info("Outbox drained", extra={"reason": f"processed={len(processed)} pending={still_pending}"})
        return processed

    def _fail(self, entry: OutboxEntry, error: str) -> OutboxEntry:
        entry = replace(entry, attempts=entry.attempts + 1, last_error=error, updated_at=time.time())
        self._outbox.save(entry)
        return entry
