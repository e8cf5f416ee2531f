from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaymentIntent:
    id: str
    client_secret: str
    amount: int  # minor units


@dataclass(frozen=True)
class PaymentConfirmation:
    succeeded: bool
    payment_ref: str | None = None
    message: str | None = None
    # Set when the provider needs the customer to finish authentication first
    redirect_url: str | None = None
