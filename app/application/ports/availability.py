from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class AvailabilityPort(ABC):
    @abstractmethod
    def list_available_dates(self, today: date) -> list[date]:
        """Dates from today onwards with at least one open slot, ascending."""
        raise NotImplementedError

    @abstractmethod
    def list_available_times(self, day: date) -> list[str]:
        """Open HH:MM time strings for a date, ascending. Empty if none."""
        raise NotImplementedError

    @abstractmethod
    def remove_slot(self, day: date, time: str) -> None:
        """Remove one slot. Removing a slot that is already gone is not an error."""
        raise NotImplementedError

    @abstractmethod
    def add_slot(self, day: date, time: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_slots(self, day: date, times: list[str]) -> None:
        """Replace a date's open times. An empty list closes the date."""
        raise NotImplementedError
