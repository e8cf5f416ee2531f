from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from app.domain.entities.booking import Booking
from app.domain.entities.order import Order


class OrderStorePort(ABC):
    @abstractmethod
    def create_order(self, booking: Booking, total_cost: Decimal, service_name: str, payment_ref: str) -> str:
        """Append an order document with status Pending. The store stamps created_at. Returns order id."""
        raise NotImplementedError

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None:
        raise NotImplementedError

    @abstractmethod
    def find_by_payment_ref(self, payment_ref: str) -> Order | None:
        raise NotImplementedError

    @abstractmethod
    def list_orders(self) -> list[Order]:
        raise NotImplementedError

    @abstractmethod
    def update_status(self, order_id: str, status: str) -> Order:
        """Raises OrderNotFoundError for an unknown id."""
        raise NotImplementedError
