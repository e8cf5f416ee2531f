from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.payment import PaymentConfirmation, PaymentIntent


class PaymentGatewayPort(ABC):
    @abstractmethod
    def create_intent(self, amount_minor_units: int) -> PaymentIntent:
        """Create a payment intent. Raises PaymentIntentError on any provider failure."""
        raise NotImplementedError

    @abstractmethod
    def confirm_payment(self, client_secret: str, return_url: str) -> PaymentConfirmation:
        """
        Confirm the payment behind a client secret.
        Provider rejections come back as PaymentConfirmation(succeeded=False, message=...)
        so the caller can retry with the same intent.
        """
        raise NotImplementedError
