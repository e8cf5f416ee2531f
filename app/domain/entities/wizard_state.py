from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from app.domain.entities.booking import Booking

STEPS: tuple[tuple[str, str], ...] = (
    ("service", "Select Service"),
    ("delivery", "Delivery Method"),
    ("schedule", "Schedule"),
    ("details", "Your Details"),
    ("confirm", "Confirmation & Payment"),
)
LAST_STEP = len(STEPS) - 1


@dataclass(frozen=True)
class WizardSession:
    session_id: str
    step: int = 0
    booking: Booking = Booking()
    client_secret: str | None = None
    available_dates: tuple[date, ...] = ()
    available_times: tuple[str, ...] = ()
    submitted: bool = False
    order_id: str | None = None
    payment_ref: str | None = None
    updated_at: float | None = None

    @property
    def step_id(self) -> str:
        return STEPS[self.step][0]

    @property
    def step_title(self) -> str:
        return STEPS[self.step][1]
