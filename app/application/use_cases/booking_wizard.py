from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from app.application.exceptions import (
    PaymentConfirmationError,
    PaymentIntentError,
    WizardNotFoundError,
    WizardStateError,
    WizardValidationError,
)
from app.application.ports.availability import AvailabilityPort
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.wizard_store import WizardStorePort
from app.application.use_cases.complete_booking import CompleteBookingUseCase
from app.application.utils.booking_rules import STEP_FIELDS, validate_fields
from app.application.utils.pricing import Quote, quote_booking, to_minor_units
from app.domain.entities.booking import Booking
from app.domain.entities.toast import Toast
from app.domain.entities.wizard_state import LAST_STEP, WizardSession

BOOKING_FIELDS = frozenset(Booking.__dataclass_fields__)

PAYMENT_INIT_TOAST = Toast(
    title="Booking Error",
    description="Could not initialize payment. Please try again.",
)
DEFAULT_PAYMENT_FAILURE = "There was a problem processing your payment."


@dataclass(frozen=True)
class WizardResult:
    session: WizardSession
    quote: Quote
    toasts: list[Toast]
    redirect_url: str | None = None


class BookingWizardUseCase:
    """
    Five-step booking flow: service, delivery, schedule, details, confirm.

    Each advance() validates only the fields of the step being left. Leaving
    the details step also creates the payment intent; the confirm step is not
    reachable without one.
    """

    def __init__(
        self,
        store: WizardStorePort,
        catalog: ServiceCatalogPort,
        availability: AvailabilityPort,
        payments: PaymentGatewayPort,
        complete_booking: CompleteBookingUseCase,
        timezone: ZoneInfo,
        return_url: str,
        max_quantity: int | None = None,
        session_ttl_seconds: int | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._availability = availability
        self._payments = payments
        self._complete_booking = complete_booking
        self._timezone = timezone
        self._return_url = return_url
        self._max_quantity = max_quantity
        self._session_ttl_seconds = session_ttl_seconds
        self._logger = logging.getLogger(__name__)

    def start(self) -> WizardResult:
        self._purge_stale_sessions()
        # One-shot fetch; later slot changes are only seen by a new session
        dates = self._availability.list_available_dates(self._today())
        session = WizardSession(
            session_id=uuid.uuid4().hex,
            available_dates=tuple(dates),
            updated_at=time.time(),
        )
        self._store.save(session)
        self._logger.info("Wizard started", extra={"session_id": session.session_id})
        return self._result(session)

    def get(self, session_id: str) -> WizardResult:
        return self._result(self._load(session_id))

    def quote(self, booking: Booking) -> Quote:
        service = self._catalog.get_service(booking.service_id) if booking.service_id else None
        return quote_booking(booking, service, self._catalog.get_repaint_unit_cost())

    def update(self, session_id: str, changes: dict[str, Any]) -> WizardResult:
        session = self._load(session_id)
        if session.submitted:
            raise WizardStateError("Booking already submitted.")
        if session.step == LAST_STEP:
            raise WizardStateError("Go back to change your booking details.")

        unknown = set(changes) - BOOKING_FIELDS
        if unknown:
            raise ValueError(f"Unknown booking fields: {', '.join(sorted(unknown))}")

        booking = session.booking
        available_times = session.available_times
        values = dict(changes)

        if values.get("service_id"):
            service = self._catalog.get_service(values["service_id"])
            if service is not None:
                values["service_id"] = service.id

        if "quantity" in values:
            values["quantity"] = max(1, int(values["quantity"] or 1))

        if "booking_date" in values and values["booking_date"] != booking.booking_date:
            new_date = values["booking_date"]
            # A new date invalidates the old time; only a time sent with it survives
            if "booking_time" not in values:
                values["booking_time"] = None
            available_times = tuple(self._times_for(new_date)) if new_date else ()

        booking = replace(booking, **values)
        session = replace(
            session,
            booking=booking,
            available_times=available_times,
            updated_at=time.time(),
        )
        self._store.save(session)
        return self._result(session)

    def advance(self, session_id: str) -> WizardResult:
        session = self._load(session_id)
        if session.step >= LAST_STEP:
            return self._result(session)

        booking = session.booking
        if session.step_id == "schedule" and booking.booking_date is not None:
            # Re-read the date's times so a slot taken since selection is caught here
            session = replace(session, available_times=tuple(self._times_for(booking.booking_date)))
            self._store.save(session)

        errors = validate_fields(
            booking,
            STEP_FIELDS[session.step],
            self._catalog,
            available_times=session.available_times,
            max_quantity=self._max_quantity,
        )
        if errors:
            self._logger.info(
                "Step validation failed",
                extra={"session_id": session_id, "step": session.step, "reason": ",".join(sorted(errors))},
            )
            raise WizardValidationError(errors)

        if session.step == LAST_STEP - 1:
            amount = to_minor_units(self.quote(booking).total)
            try:
                intent = self._payments.create_intent(amount)
            except PaymentIntentError as e:
                self._logger.error(
                    "Error creating payment intent",
                    extra={"session_id": session_id, "reason": str(e)},
                )
                return self._result(session, toasts=[PAYMENT_INIT_TOAST])
            session = replace(session, client_secret=intent.client_secret)

        session = replace(session, step=session.step + 1, updated_at=time.time())
        self._store.save(session)
        self._logger.info("Wizard advanced", extra={"session_id": session_id, "step": session.step})
        return self._result(session)

    def retreat(self, session_id: str) -> WizardResult:
        session = self._load(session_id)
        if session.submitted:
            raise WizardStateError("Booking already submitted.")
        if session.step == 0:
            return self._result(session)

        # The secret is tied to the old total; re-entering confirm creates a fresh intent
        session = replace(
            session,
            step=session.step - 1,
            client_secret=None,
            updated_at=time.time(),
        )
        self._store.save(session)
        return self._result(session)

    def confirm_payment(self, session_id: str) -> WizardResult:
        session = self._load(session_id)
        if session.submitted:
            return self._result(session)
        if session.step != LAST_STEP or not session.client_secret:
            raise WizardStateError("Payment is not ready for this booking.")

        try:
            confirmation = self._payments.confirm_payment(session.client_secret, self._return_url)
        except PaymentConfirmationError as e:
            self._logger.error("Payment confirmation error", extra={"session_id": session_id, "reason": str(e)})
            return self._result(session, toasts=[_payment_failed(str(e) or None)])

        if not confirmation.succeeded:
            if confirmation.redirect_url:
                return self._result(session, redirect_url=confirmation.redirect_url)
            self._logger.info("Payment failed", extra={"session_id": session_id, "reason": confirmation.message})
            return self._result(session, toasts=[_payment_failed(confirmation.message)])

        booking = session.booking
        quote = self.quote(booking)
        service = self._catalog.get_service(booking.service_id or "")
        if service is not None:
            booking = replace(booking, service_id=service.id)
        completion = self._complete_booking.execute(
            booking,
            quote.total,
            service.name if service else (booking.service_id or ""),
            confirmation.payment_ref or "",
        )

        session = replace(session, payment_ref=confirmation.payment_ref, updated_at=time.time())
        if completion.order_id:
            session = replace(session, submitted=True, order_id=completion.order_id)
        self._store.save(session)
        return self._result(session, toasts=completion.toasts)

    def discard(self, session_id: str) -> None:
        """Abandon a session, e.g. when the customer reloads the booking page."""
        self._load(session_id)
        self._store.delete(session_id)
        self._logger.info("Wizard discarded", extra={"session_id": session_id})

    def _purge_stale_sessions(self) -> None:
        if not self._session_ttl_seconds:
            return
        purged = self._store.purge_older_than(time.time() - self._session_ttl_seconds)
        if purged:
            self._logger.info("Stale wizard sessions purged", extra={"reason": f"purged={purged}"})

    def _load(self, session_id: str) -> WizardSession:
        session = self._store.get(session_id)
        if session is None:
            raise WizardNotFoundError(f"Unknown booking session: {session_id}")
        return session

    def _times_for(self, day: date) -> list[str]:
        if day < self._today():
            return []
        return self._availability.list_available_times(day)

    def _today(self) -> date:
        return datetime.now(self._timezone).date()

    def _result(
        self,
        session: WizardSession,
        toasts: list[Toast] | None = None,
        redirect_url: str | None = None,
    ) -> WizardResult:
        return WizardResult(
            session=session,
            quote=self.quote(session.booking),
            toasts=list(toasts or []),
            redirect_url=redirect_url,
        )


def _payment_failed(message: str | None) -> Toast:
    return Toast(title="Payment Failed", description=message or DEFAULT_PAYMENT_FAILURE)
