from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from app.domain.entities.service_catalog import Service


class ServiceCatalogPort(ABC):
    @abstractmethod
    def get_service(self, service_id: str) -> Service | None:
        """Get catalog entry by service id."""
        raise NotImplementedError

    @abstractmethod
    def list_services(self) -> list[Service]:
        raise NotImplementedError

    @abstractmethod
    def get_repaint_unit_cost(self) -> Decimal:
        """Per-pair surcharge for the repaint add-on."""
        raise NotImplementedError
