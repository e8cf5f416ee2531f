"""Fakes and fixtures shared across the test modules."""

from __future__ import annotations

import threading
import time
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from app.application.exceptions import OrderPersistenceError, PaymentIntentError, SlotRemovalError
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.domain.entities.payment import PaymentConfirmation, PaymentIntent
from app.infrastructure.availability.memory_availability import MemoryAvailability
from app.infrastructure.store.memory_store import MemoryOrderStore

TZ = ZoneInfo("Europe/London")

# A few days out so the business-timezone "today" never disagrees with the test host
OPEN_DAY = date.today() + timedelta(days=3)
OTHER_DAY = date.today() + timedelta(days=4)
EMPTY_DAY = date.today() + timedelta(days=5)


class FakePaymentGateway(PaymentGatewayPort):
    def __init__(self) -> None:
        self.intents: list[PaymentIntent] = []
        self.fail_intents = 0
        self.declines: list[str | None] = []
        self.redirect_url: str | None = None
        self.confirm_calls = 0

    def create_intent(self, amount_minor_units: int) -> PaymentIntent:
        if self.fail_intents:
            self.fail_intents -= 1
            raise PaymentIntentError("HTTP 500 from provider")
        n = len(self.intents) + 1
        intent = PaymentIntent(id=f"pi_{n}", client_secret=f"pi_{n}_secret_x", amount=amount_minor_units)
        self.intents.append(intent)
        return intent

    def confirm_payment(self, client_secret: str, return_url: str) -> PaymentConfirmation:
        self.confirm_calls += 1
        if self.redirect_url:
            url, self.redirect_url = self.redirect_url, None
            return PaymentConfirmation(succeeded=False, redirect_url=url)
        if self.declines:
            return PaymentConfirmation(succeeded=False, message=self.declines.pop(0))
        intent_id = client_secret.partition("_secret_")[0]
        return PaymentConfirmation(succeeded=True, payment_ref=intent_id)


class FlakyOrderStore(MemoryOrderStore):
    """Fails the first `failures` writes."""

    def __init__(self, failures: int = 1) -> None:
        super().__init__()
        self.failures = failures

    def create_order(self, booking, total_cost, service_name, payment_ref):
        if self.failures:
            self.failures -= 1
            raise OrderPersistenceError("document store unavailable")
        return super().create_order(booking, total_cost, service_name, payment_ref)


class SlowOrderStore(FlakyOrderStore):
    """Pauses before each payment-ref lookup so overlapping completions interleave."""

    def __init__(self, failures: int = 0, delay: float = 0.05) -> None:
        super().__init__(failures)
        self.delay = delay

    def find_by_payment_ref(self, payment_ref):
        time.sleep(self.delay)
        return super().find_by_payment_ref(payment_ref)


class FlakyAvailability(MemoryAvailability):
    """Fails the first `failures` slot removals."""

    def __init__(self, slots=None, failures: int = 1) -> None:
        super().__init__(slots)
        self.failures = failures

    def remove_slot(self, day, time):
        if self.failures:
            self.failures -= 1
            raise SlotRemovalError("availability store unavailable")
        super().remove_slot(day, time)


def fill_to_confirm(wizard: BookingWizardUseCase, session_id: str, **overrides) -> None:
    """Walk a session from step 0 to the confirm step with valid data."""
    fields = {
        "service_id": "standard",
        "quantity": 2,
        "repaint": True,
        "delivery_method": "dropoff",
        "booking_date": OPEN_DAY,
        "booking_time": "11:00",
        "full_name": "Jordan Smith",
        "email": "jordan@example.com",
    }
    fields.update(overrides)
    wizard.update(session_id, fields)
    for _ in range(4):
        wizard.advance(session_id)


def run_together(*targets) -> None:
    """Start every target on its own thread at the same moment and wait for all of them."""
    barrier = threading.Barrier(len(targets))

    def _run(target):
        barrier.wait()
        target()

    threads = [threading.Thread(target=_run, args=(target,)) for target in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
