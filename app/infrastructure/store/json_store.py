from __future__ import annotations

import json
import logging
import re
import threading
import time
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator

from app.application.exceptions import OrderNotFoundError, OrderPersistenceError
from app.application.ports.order_store import OrderStorePort
from app.application.ports.outbox import OutboxPort
from app.application.ports.session_store import SessionStorePort
from app.application.ports.wizard_store import WizardStorePort
from app.domain.entities.booking import Booking
from app.domain.entities.order import Order, order_from_booking
from app.domain.entities.outbox import OUTBOX_PENDING, OutboxEntry
from app.domain.entities.wizard_state import WizardSession
from app.infrastructure.store.locks import KeyedLocks
from app.infrastructure.store.serializers import (
    deserialize_order,
    deserialize_outbox_entry,
    deserialize_wizard_session,
    serialize_order,
    serialize_outbox_entry,
    serialize_wizard_session,
)


_KEY_RE = re.compile(r"^[A-Za-z0-9_\-]{1,128}$")


class JsonCollection:
    """A directory of JSON documents, one file per key, written atomically."""

    def __init__(self, data_dir: str, name: str) -> None:
        self._dir = Path(data_dir) / name
        self._dir.mkdir(parents=True, exist_ok=True)
        self._locks = KeyedLocks()
        self._logger = logging.getLogger(__name__)

    def lock(self, key: str) -> threading.Lock:
        """Get or create a lock for a document key."""
        return self._locks.get(key)

    def _path(self, key: str) -> Path:
        # Keys come from URLs; keep them inside the collection directory
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid document key: {key!r}")
        return self._dir / f"{key}.json"

    def exists(self, key: str) -> bool:
        return bool(_KEY_RE.match(key)) and self._path(key).exists()

    def load(self, key: str) -> dict[str, Any] | None:
        """Load a document, None if missing, unreadable or the key is invalid."""
        if not _KEY_RE.match(key):
            return None
        file_path = self._path(key)
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            self._logger.error("Unreadable document", extra={"reason": f"{file_path}: {e}"})
            return None

    def save(self, key: str, data: dict[str, Any]) -> None:
        """Save a document atomically via temp file and rename."""
        file_path = self._path(key)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def iter_documents(self) -> Iterator[dict[str, Any]]:
        for file_path in sorted(self._dir.glob("*.json")):
            data = self.load(file_path.stem)
            if data is not None:
                yield data


class JsonWizardStore(WizardStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._docs = JsonCollection(data_dir, "wizard_sessions")

    def get(self, session_id: str) -> WizardSession | None:
        with self._docs.lock(session_id):
            data = self._docs.load(session_id)
        return deserialize_wizard_session(data) if data else None

    def save(self, session: WizardSession) -> None:
        with self._docs.lock(session.session_id):
            self._docs.save(session.session_id, serialize_wizard_session(session))

    def delete(self, session_id: str) -> None:
        with self._docs.lock(session_id):
            self._docs.delete(session_id)

    def purge_older_than(self, cutoff: float) -> int:
        purged = 0
        for data in list(self._docs.iter_documents()):
            session_id = data.get("session_id", "")
            if (data.get("updated_at") or 0) >= cutoff:
                continue
            with self._docs.lock(session_id):
                # Re-check under the lock; a concurrent save may have refreshed it
                current = self._docs.load(session_id)
                if current is None or (current.get("updated_at") or 0) >= cutoff:
                    continue
                self._docs.delete(session_id)
            purged += 1
        return purged


class JsonOrderStore(OrderStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._docs = JsonCollection(data_dir, "orders")

    def create_order(self, booking: Booking, total_cost: Decimal, service_name: str, payment_ref: str) -> str:
        order_id = uuid.uuid4().hex
        order = order_from_booking(
            order_id,
            booking,
            total_cost,
            service_name,
            payment_ref,
            created_at=datetime.now(timezone.utc),
        )
        try:
            with self._docs.lock(order_id):
                self._docs.save(order_id, serialize_order(order))
        except OSError as e:
            raise OrderPersistenceError(f"Could not write order {order_id}: {e}") from e
        return order_id

    def get_order(self, order_id: str) -> Order | None:
        with self._docs.lock(order_id):
            data = self._docs.load(order_id)
        return deserialize_order(data) if data else None

    def find_by_payment_ref(self, payment_ref: str) -> Order | None:
        # Full scan; fine for a single workshop's order volume
        for data in self._docs.iter_documents():
            if data.get("payment_ref") == payment_ref:
                return deserialize_order(data)
        return None

    def list_orders(self) -> list[Order]:
        return [deserialize_order(data) for data in self._docs.iter_documents()]

    def update_status(self, order_id: str, status: str) -> Order:
        with self._docs.lock(order_id):
            data = self._docs.load(order_id)
            if data is None:
                raise OrderNotFoundError(f"Unknown order: {order_id}")
            order = replace(deserialize_order(data), status=status)
            self._docs.save(order_id, serialize_order(order))
        return order


class JsonOutbox(OutboxPort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._docs = JsonCollection(data_dir, "outbox")
        self._processing = KeyedLocks()

    def add(self, entry: OutboxEntry) -> OutboxEntry:
        with self._docs.lock(entry.payment_ref):
            data = self._docs.load(entry.payment_ref)
            if data is not None:
                return deserialize_outbox_entry(data)
            self._docs.save(entry.payment_ref, serialize_outbox_entry(entry))
        return entry

    def get(self, payment_ref: str) -> OutboxEntry | None:
        with self._docs.lock(payment_ref):
            data = self._docs.load(payment_ref)
        return deserialize_outbox_entry(data) if data else None

    def save(self, entry: OutboxEntry) -> None:
        with self._docs.lock(entry.payment_ref):
            self._docs.save(entry.payment_ref, serialize_outbox_entry(entry))

    def list_pending(self) -> list[OutboxEntry]:
        entries = [deserialize_outbox_entry(data) for data in self._docs.iter_documents()]
        return sorted(
            (e for e in entries if e.status == OUTBOX_PENDING),
            key=lambda e: e.created_at or 0,
        )

    def lock(self, payment_ref: str) -> threading.Lock:
        return self._processing.get(payment_ref)


class JsonSessionStore(SessionStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._docs = JsonCollection(data_dir, "revoked_tokens")

    def revoke(self, token_id: str, expires_at: float) -> None:
        with self._docs.lock(token_id):
            self._docs.save(token_id, {"token_id": token_id, "expires_at": expires_at, "revoked_at": time.time()})

    def is_revoked(self, token_id: str) -> bool:
        with self._docs.lock(token_id):
            return self._docs.exists(token_id)
