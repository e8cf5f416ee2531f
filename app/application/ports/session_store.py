from abc import ABC, abstractmethod


class SessionStorePort(ABC):
    """Tracks admin tokens invalidated before their expiry."""

    @abstractmethod
    def revoke(self, token_id: str, expires_at: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def is_revoked(self, token_id: str) -> bool:
        raise NotImplementedError
