from __future__ import annotations

import logging
from datetime import date, timedelta

from app.application.ports.availability import AvailabilityPort

DEFAULT_TIMES = ("09:00", "11:00", "13:00", "15:00")


class MemoryAvailability(AvailabilityPort):
    def __init__(self, slots: dict[date, list[str]] | None = None) -> None:
        self._slots: dict[date, set[str]] = {d: set(times) for d, times in (slots or {}).items() if times}
        self._logger = logging.getLogger(__name__)

    @classmethod
    def seeded(cls, start: date, days: int = 14, times: tuple[str, ...] = DEFAULT_TIMES) -> "MemoryAvailability":
        """Open every day except Sunday for the next `days` days. Used in dev/local."""
        slots: dict[date, list[str]] = {}
        for offset in range(days):
            day = start + timedelta(days=offset)
            if day.weekday() != 6:
                slots[day] = list(times)
        return cls(slots)

    def list_available_dates(self, today: date) -> list[date]:
        return sorted(d for d, times in self._slots.items() if times and d >= today)

    def list_available_times(self, day: date) -> list[str]:
        return sorted(self._slots.get(day, ()))

    def remove_slot(self, day: date, time: str) -> None:
        times = self._slots.get(day)
        if not times:
            return
        times.discard(time)
        if not times:
            del self._slots[day]
        self._logger.info("Slot removed", extra={"booking_date": day, "booking_time": time})

    def add_slot(self, day: date, time: str) -> None:
        self._slots.setdefault(day, set()).add(time)

    def set_slots(self, day: date, times: list[str]) -> None:
        if times:
            self._slots[day] = set(times)
        else:
            self._slots.pop(day, None)
