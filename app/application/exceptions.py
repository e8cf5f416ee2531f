class BookingError(RuntimeError):
    """Base class for booking flow failures."""
    pass


class WizardNotFoundError(BookingError):
    """Raised when a wizard session id is unknown or already discarded."""
    pass


class WizardStateError(BookingError):
    """Raised when an action is not valid at the wizard's current step."""
    pass


class WizardValidationError(BookingError):
    """Raised when step-scoped validation fails. Carries field-level messages."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class PaymentIntentError(BookingError):
    """Raised when the payment provider fails to create an intent (network or non-2xx)."""
    pass


class PaymentConfirmationError(BookingError):
    """Raised when the provider rejects a payment confirmation."""
    pass


class OrderPersistenceError(BookingError):
    """Raised when the order write fails after payment succeeded."""
    pass


class SlotRemovalError(BookingError):
    """Raised when a booked slot could not be removed from availability."""
    pass


class OrderNotFoundError(BookingError):
    pass


class AuthenticationError(RuntimeError):
    """Raised on bad credentials or an expired/revoked admin token."""
    pass
