from __future__ import annotations

from decimal import Decimal

from app.application.ports.service_catalog import ServiceCatalogPort
from app.domain.entities.service_catalog import Service
from app.infrastructure.catalog.service_catalog_data import SERVICE_CATALOG


class ServiceCatalogStore(ServiceCatalogPort):
    def __init__(
        self,
        repaint_unit_cost: Decimal,
        catalog: dict[str, Service] | None = None,
    ) -> None:
        self._catalog = catalog or SERVICE_CATALOG
        self._repaint_unit_cost = repaint_unit_cost

    def get_service(self, service_id: str) -> Service | None:
        normalized_id = service_id.lower().strip()
        return self._catalog.get(normalized_id)

    def list_services(self) -> list[Service]:
        return list(self._catalog.values())

    def get_repaint_unit_cost(self) -> Decimal:
        return self._repaint_unit_cost
