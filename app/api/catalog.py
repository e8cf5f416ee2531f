from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends

from app.api.schemas import AvailableDatesSchema, CatalogSchema, ServiceSchema, SlotsSchema
from app.application.ports.availability import AvailabilityPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.wiring.dependencies import get_availability, get_service_catalog, get_timezone

router = APIRouter(prefix="/api")


@router.get("/services", response_model=CatalogSchema)
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)):
    return CatalogSchema(
        services=[ServiceSchema.from_entity(s) for s in catalog.list_services()],
        repaint_unit_cost=float(catalog.get_repaint_unit_cost()),
    )


@router.get("/availability/dates", response_model=AvailableDatesSchema)
def list_available_dates(availability: AvailabilityPort = Depends(get_availability)):
    today = datetime.now(get_timezone()).date()
    return AvailableDatesSchema(dates=availability.list_available_dates(today))


@router.get("/availability/{day}", response_model=SlotsSchema)
def list_available_times(day: date, availability: AvailabilityPort = Depends(get_availability)):
    today = datetime.now(get_timezone()).date()
    times = availability.list_available_times(day) if day >= today else []
    return SlotsSchema(date=day, times=times)
