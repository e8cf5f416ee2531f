from __future__ import annotations

import threading
import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal

from app.application.exceptions import OrderNotFoundError
from app.application.ports.order_store import OrderStorePort
from app.application.ports.outbox import OutboxPort
from app.application.ports.session_store import SessionStorePort
from app.application.ports.wizard_store import WizardStorePort
from app.domain.entities.booking import Booking
from app.domain.entities.order import Order, order_from_booking
from app.domain.entities.outbox import OUTBOX_PENDING, OutboxEntry
from app.domain.entities.wizard_state import WizardSession
from app.infrastructure.store.locks import KeyedLocks


class MemoryWizardStore(WizardStorePort):
    def __init__(self) -> None:
        self._sessions: dict[str, WizardSession] = {}

    def get(self, session_id: str) -> WizardSession | None:
        return self._sessions.get(session_id)

    def save(self, session: WizardSession) -> None:
        self._sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def purge_older_than(self, cutoff: float) -> int:
        stale = [k for k, s in list(self._sessions.items()) if (s.updated_at or 0) < cutoff]
        for session_id in stale:
            self._sessions.pop(session_id, None)
        return len(stale)


class MemoryOrderStore(OrderStorePort):
    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}

    def create_order(self, booking: Booking, total_cost: Decimal, service_name: str, payment_ref: str) -> str:
        order_id = uuid.uuid4().hex
        self._orders[order_id] = order_from_booking(
            order_id,
            booking,
            total_cost,
            service_name,
            payment_ref,
            created_at=datetime.now(timezone.utc),
        )
        return order_id

    def get_order(self, order_id: str) -> Order | None:
        return self._orders.get(order_id)

    def find_by_payment_ref(self, payment_ref: str) -> Order | None:
        for order in self._orders.values():
            if order.payment_ref == payment_ref:
                return order
        return None

    def list_orders(self) -> list[Order]:
        return list(self._orders.values())

    def update_status(self, order_id: str, status: str) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"Unknown order: {order_id}")
        order = replace(order, status=status)
        self._orders[order_id] = order
        return order


class MemoryOutbox(OutboxPort):
    def __init__(self) -> None:
        self._entries: dict[str, OutboxEntry] = {}
        self._locks = KeyedLocks()

    def add(self, entry: OutboxEntry) -> OutboxEntry:
        return self._entries.setdefault(entry.payment_ref, entry)

    def get(self, payment_ref: str) -> OutboxEntry | None:
        return self._entries.get(payment_ref)

    def save(self, entry: OutboxEntry) -> None:
        self._entries[entry.payment_ref] = entry

    def list_pending(self) -> list[OutboxEntry]:
        return [e for e in self._entries.values() if e.status == OUTBOX_PENDING]

    def lock(self, payment_ref: str) -> threading.Lock:
        return self._locks.get(payment_ref)


class MemorySessionStore(SessionStorePort):
    def __init__(self) -> None:
        self._revoked: dict[str, float] = {}

    def revoke(self, token_id: str, expires_at: float) -> None:
        self._prune()
        self._revoked[token_id] = expires_at

    def is_revoked(self, token_id: str) -> bool:
        return token_id in self._revoked

    def _prune(self) -> None:
        # Expired tokens fail verification anyway; no need to remember them
        now = time.time()
        self._revoked = {k: v for k, v in self._revoked.items() if v > now}
