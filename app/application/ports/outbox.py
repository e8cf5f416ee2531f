import threading
from abc import ABC, abstractmethod

from app.domain.entities.outbox import OutboxEntry


class OutboxPort(ABC):
    @abstractmethod
    def add(self, entry: OutboxEntry) -> OutboxEntry:
        """
        Store a new entry keyed by payment_ref.
        If an entry already exists for that payment_ref it is returned unchanged.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, payment_ref: str) -> OutboxEntry | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, entry: OutboxEntry) -> None:
        raise NotImplementedError

    @abstractmethod
    def lock(self, payment_ref: str) -> threading.Lock:
        """
        Lock held while an entry's side effects run.
        Separate from any storage lock so save() can be called while holding it.
        """
        raise NotImplementedError

    @abstractmethod
    def list_pending(self) -> list[OutboxEntry]:
        raise NotImplementedError
