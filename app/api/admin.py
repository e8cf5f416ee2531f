from __future__ import annotations

import logging
from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.schemas import (
    LoginRequestSchema,
    LoginResponseSchema,
    OrderSchema,
    OrderStatusLiteral,
    OutboxEntrySchema,
    ProjectionPointSchema,
    SlotCreateSchema,
    SlotsReplaceSchema,
    SlotsSchema,
    StatsSchema,
    StatusUpdateSchema,
)
from app.application.exceptions import AuthenticationError, OrderNotFoundError
from app.application.ports.availability import AvailabilityPort
from app.application.ports.outbox import OutboxPort
from app.application.use_cases.admin_auth import AdminAuthUseCase
from app.application.use_cases.admin_orders import AdminOrdersUseCase
from app.application.use_cases.complete_booking import CompleteBookingUseCase
from app.domain.entities.admin_session import AdminSession
from app.wiring.dependencies import (
    get_admin_auth_use_case,
    get_admin_orders_use_case,
    get_availability,
    get_complete_booking_use_case,
    get_outbox,
    get_timezone,
)

router = APIRouter(prefix="/api/admin")
logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: AdminAuthUseCase = Depends(get_admin_auth_use_case),
) -> AdminSession:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
    try:
        return auth.resolve(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})


@router.post("/login", response_model=LoginResponseSchema)
def login(req: LoginRequestSchema, auth: AdminAuthUseCase = Depends(get_admin_auth_use_case)):
    try:
        session = auth.login(req.email, req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponseSchema(access_token=session.token, role=session.role, expires_at=session.expires_at)


@router.post("/logout", status_code=204)
def logout(
    session: AdminSession = Depends(require_admin),
    auth: AdminAuthUseCase = Depends(get_admin_auth_use_case),
):
    auth.logout(session)


@router.get("/orders", response_model=list[OrderSchema])
def list_orders(
    search: str | None = None,
    status: OrderStatusLiteral | None = None,
    sort: str = Query("date-desc", pattern=r"^(date|price)-(asc|desc)$"),
    session: AdminSession = Depends(require_admin),
    uc: AdminOrdersUseCase = Depends(get_admin_orders_use_case),
):
    return [OrderSchema.from_entity(o) for o in uc.list_orders(search=search, status=status, sort=sort)]


@router.patch("/orders/{order_id}", response_model=OrderSchema)
def update_order_status(
    order_id: str,
    req: StatusUpdateSchema,
    session: AdminSession = Depends(require_admin),
    uc: AdminOrdersUseCase = Depends(get_admin_orders_use_case),
):
    try:
        order = uc.update_status(order_id, req.status)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return OrderSchema.from_entity(order)


@router.get("/stats", response_model=StatsSchema)
def stats(
    session: AdminSession = Depends(require_admin),
    uc: AdminOrdersUseCase = Depends(get_admin_orders_use_case),
):
    return StatsSchema.from_entity(uc.stats(datetime.now(get_timezone())))


@router.get("/projections", response_model=list[ProjectionPointSchema])
def projections(
    period: str = Query("7d", pattern=r"^(7d|30d|90d)$"),
    session: AdminSession = Depends(require_admin),
    uc: AdminOrdersUseCase = Depends(get_admin_orders_use_case),
):
    today = datetime.now(get_timezone()).date()
    return [ProjectionPointSchema.from_entity(p) for p in uc.projections(period, today)]


@router.get("/priority-orders", response_model=list[OrderSchema])
def priority_orders(
    session: AdminSession = Depends(require_admin),
    uc: AdminOrdersUseCase = Depends(get_admin_orders_use_case),
):
    today = datetime.now(get_timezone()).date()
    return [OrderSchema.from_entity(o) for o in uc.priority_orders(today)]


@router.get("/availability/{day}", response_model=SlotsSchema)
def list_slots(
    day: date,
    session: AdminSession = Depends(require_admin),
    availability: AvailabilityPort = Depends(get_availability),
):
    return SlotsSchema(date=day, times=availability.list_available_times(day))


@router.post("/availability/{day}", response_model=SlotsSchema)
def add_slot(
    day: date,
    req: SlotCreateSchema,
    session: AdminSession = Depends(require_admin),
    availability: AvailabilityPort = Depends(get_availability),
):
    availability.add_slot(day, req.time)
    logger.info("Slot added", extra={"booking_date": day, "booking_time": req.time})
    return SlotsSchema(date=day, times=availability.list_available_times(day))


@router.put("/availability/{day}", response_model=SlotsSchema)
def replace_slots(
    day: date,
    req: SlotsReplaceSchema,
    session: AdminSession = Depends(require_admin),
    availability: AvailabilityPort = Depends(get_availability),
):
    availability.set_slots(day, req.times)
    return SlotsSchema(date=day, times=availability.list_available_times(day))


@router.delete("/availability/{day}/{time}", response_model=SlotsSchema)
def remove_slot(
    day: date,
    time: str,
    session: AdminSession = Depends(require_admin),
    availability: AvailabilityPort = Depends(get_availability),
):
    availability.remove_slot(day, time)
    return SlotsSchema(date=day, times=availability.list_available_times(day))


@router.get("/outbox", response_model=list[OutboxEntrySchema])
def list_outbox(
    session: AdminSession = Depends(require_admin),
    outbox: OutboxPort = Depends(get_outbox),
):
    return [OutboxEntrySchema.from_entity(e) for e in outbox.list_pending()]


@router.post("/outbox/drain", response_model=list[OutboxEntrySchema])
def drain_outbox(
    session: AdminSession = Depends(require_admin),
    uc: CompleteBookingUseCase = Depends(get_complete_booking_use_case),
):
    return [OutboxEntrySchema.from_entity(e) for e in uc.drain()]
