from abc import ABC, abstractmethod

from app.domain.entities.wizard_state import WizardSession


class WizardStorePort(ABC):
    @abstractmethod
    def get(self, session_id: str) -> WizardSession | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: WizardSession) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def purge_older_than(self, cutoff: float) -> int:
        """Delete sessions last updated before cutoff (epoch seconds). Returns how many went."""
        raise NotImplementedError
