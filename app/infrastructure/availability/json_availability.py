from __future__ import annotations

import logging
from datetime import date

from app.application.exceptions import SlotRemovalError
from app.application.ports.availability import AvailabilityPort
from app.infrastructure.store.json_store import JsonCollection


class JsonAvailability(AvailabilityPort):
    """One document per date: {"date": "YYYY-MM-DD", "times": ["09:00", ...]}."""

    def __init__(self, data_dir: str = "./data") -> None:
        self._docs = JsonCollection(data_dir, "availability")
        self._logger = logging.getLogger(__name__)

    def list_available_dates(self, today: date) -> list[date]:
        dates: list[date] = []
        for data in self._docs.iter_documents():
            try:
                day = date.fromisoformat(data["date"])
            except (KeyError, ValueError, TypeError):
                continue
            if data.get("times") and day >= today:
                dates.append(day)
        return sorted(dates)

    def list_available_times(self, day: date) -> list[str]:
        key = day.isoformat()
        with self._docs.lock(key):
            data = self._docs.load(key)
        return sorted((data or {}).get("times", []))

    def remove_slot(self, day: date, time: str) -> None:
        key = day.isoformat()
        try:
            with self._docs.lock(key):
                data = self._docs.load(key)
                if not data:
                    return
                times = [t for t in data.get("times", []) if t != time]
                if times:
                    self._docs.save(key, {"date": key, "times": sorted(times)})
                else:
                    self._docs.delete(key)
        except OSError as e:
            raise SlotRemovalError(f"Could not remove {key} {time}: {e}") from e
        self._logger.info("Slot removed", extra={"booking_date": key, "booking_time": time})

    def add_slot(self, day: date, time: str) -> None:
        key = day.isoformat()
        with self._docs.lock(key):
            data = self._docs.load(key) or {"date": key, "times": []}
            times = set(data.get("times", []))
            times.add(time)
            self._docs.save(key, {"date": key, "times": sorted(times)})

    def set_slots(self, day: date, times: list[str]) -> None:
        key = day.isoformat()
        with self._docs.lock(key):
            if times:
                self._docs.save(key, {"date": key, "times": sorted(set(times))})
            else:
                self._docs.delete(key)
        self._logger.info("Slots replaced", extra={"booking_date": key, "reason": ",".join(sorted(set(times)))})
