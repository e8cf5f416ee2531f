from __future__ import annotations

import logging
import uuid

from app.application.ports.payment_gateway import PaymentGatewayPort
from app.domain.entities.payment import PaymentConfirmation, PaymentIntent


class MockPaymentGateway(PaymentGatewayPort):
    def __init__(self) -> None:
        self._intents: dict[str, PaymentIntent] = {}
        self._logger = logging.getLogger(__name__)

    def create_intent(self, amount_minor_units: int) -> PaymentIntent:
        # Unique across restarts; persisted outbox entries are keyed by this id
        intent_id = f"pi_mock_{uuid.uuid4().hex[:16]}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid.uuid4().hex[:12]}",
            amount=amount_minor_units,
        )
        self._intents[intent.client_secret] = intent
        self._logger.info("Mock payment intent created", extra={"payment_ref": intent_id})
        return intent

    def confirm_payment(self, client_secret: str, return_url: str) -> PaymentConfirmation:
        intent = self._intents.get(client_secret)
        if intent is None:
            return PaymentConfirmation(succeeded=False, message="Unknown payment.")
        self._logger.info("Mock payment confirmed", extra={"payment_ref": intent.id})
        return PaymentConfirmation(succeeded=True, payment_ref=intent.id)
