from __future__ import annotations

import logging

import stripe

from app.application.exceptions import PaymentConfirmationError, PaymentIntentError
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.core.config import settings
from app.domain.entities.payment import PaymentConfirmation, PaymentIntent


def intent_id_from_secret(client_secret: str) -> str:
    """Stripe client secrets look like 'pi_123_secret_abc'; the intent id is the prefix."""
    intent_id, sep, _ = client_secret.partition("_secret_")
    if not sep or not intent_id:
        raise PaymentConfirmationError("Malformed payment client secret")
    return intent_id


class StripePaymentGateway(PaymentGatewayPort):
    def __init__(self, api_key: str | None = None, currency: str | None = None) -> None:
        self._api_key = api_key or settings.STRIPE_SECRET_KEY
        self._currency = currency or settings.CURRENCY
        self._logger = logging.getLogger(__name__)

        if not self._api_key:
            raise ValueError("STRIPE_SECRET_KEY is required for Stripe payments")

    def create_intent(self, amount_minor_units: int) -> PaymentIntent:
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount_minor_units,
                currency=self._currency,
                automatic_payment_methods={"enabled": True},
                api_key=self._api_key,
            )
        except stripe.StripeError as e:
            self._logger.error("Stripe intent creation failed", extra={"reason": str(e)})
            raise PaymentIntentError(e.user_message or str(e)) from e

        if not intent.client_secret:
            raise PaymentIntentError("No client secret returned from Stripe")
        self._logger.info("Payment intent created", extra={"payment_ref": intent.id})
        return PaymentIntent(id=intent.id, client_secret=intent.client_secret, amount=amount_minor_units)

    def confirm_payment(self, client_secret: str, return_url: str) -> PaymentConfirmation:
        intent_id = intent_id_from_secret(client_secret)
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=self._api_key)
            if intent.status == "requires_confirmation":
                intent = stripe.PaymentIntent.confirm(intent_id, return_url=return_url, api_key=self._api_key)
        except stripe.StripeError as e:
            self._logger.error("Stripe confirmation failed", extra={"payment_ref": intent_id, "reason": str(e)})
            return PaymentConfirmation(succeeded=False, message=e.user_message or None)

        if intent.status == "succeeded":
            return PaymentConfirmation(succeeded=True, payment_ref=intent.id)

        if intent.status == "requires_action":
            # Redirect only when the provider's authentication flow needs it
            next_action = getattr(intent, "next_action", None)
            redirect = getattr(next_action, "redirect_to_url", None) if next_action else None
            url = getattr(redirect, "url", None) if redirect else None
            if url:
                return PaymentConfirmation(succeeded=False, redirect_url=url)

        if intent.status == "processing":
            return PaymentConfirmation(
                succeeded=False,
                message="Your payment is still processing. Please try again shortly.",
            )

        last_error = getattr(intent, "last_payment_error", None)
        message = getattr(last_error, "message", None) if last_error else None
        return PaymentConfirmation(succeeded=False, message=message)
