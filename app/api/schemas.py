from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.application.use_cases.admin_orders import DashboardStats, ProjectionPoint
from app.application.use_cases.booking_wizard import WizardResult
from app.domain.entities.booking import Booking
from app.domain.entities.order import Order
from app.domain.entities.outbox import OutboxEntry
from app.domain.entities.service_catalog import Service
from app.domain.entities.wizard_state import STEPS

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
TEXT_FIELDS = ("full_name", "email", "phone_number", "pickup_address", "notes")

OrderStatusLiteral = Literal["Pending", "In Progress", "Completed", "Cancelled"]


class ServiceSchema(BaseModel):
    id: str
    name: str
    description: str
    price: float
    features: list[str] = Field(default_factory=list)
    best_value: bool = False

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceSchema":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            price=float(service.price),
            features=list(service.features),
            best_value=service.best_value,
        )


class CatalogSchema(BaseModel):
    services: list[ServiceSchema]
    repaint_unit_cost: float


class AvailableDatesSchema(BaseModel):
    dates: list[date]


class SlotsSchema(BaseModel):
    date: date
    times: list[str]


class SlotCreateSchema(BaseModel):
    time: str = Field(pattern=TIME_PATTERN)


class SlotsReplaceSchema(BaseModel):
    times: list[Annotated[str, Field(pattern=TIME_PATTERN)]]


class CreatePaymentIntentRequestSchema(BaseModel):
    amount: int


class CreatePaymentIntentResponseSchema(BaseModel):
    clientSecret: str


class ToastSchema(BaseModel):
    title: str
    description: str
    variant: str = "destructive"


class QuoteSchema(BaseModel):
    unit_price: float
    quantity: int
    subtotal: float
    repaint_total: float
    total: float


class BookingSchema(BaseModel):
    service_id: str | None = None
    quantity: int = 1
    repaint: bool = False
    delivery_method: Literal["collection", "dropoff"] | None = None
    booking_date: date | None = None
    booking_time: str | None = None
    full_name: str = ""
    email: str = ""
    phone_number: str = ""
    pickup_address: str = ""
    notes: str = ""

    @classmethod
    def from_entity(cls, booking: Booking) -> "BookingSchema":
        return cls(**{name: getattr(booking, name) for name in cls.model_fields})


class BookingUpdateSchema(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    model_config = ConfigDict(extra="forbid")

    service_id: str | None = None
    quantity: int | None = None
    repaint: bool | None = None
    delivery_method: Literal["collection", "dropoff"] | None = None
    booking_date: date | None = None
    booking_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    pickup_address: str | None = None
    notes: str | None = None

    def to_changes(self) -> dict[str, Any]:
        changes = self.model_dump(exclude_unset=True)
        for name in TEXT_FIELDS:
            if name in changes and changes[name] is None:
                changes[name] = ""
        if "repaint" in changes and changes["repaint"] is None:
            changes["repaint"] = False
        return changes


class StepSchema(BaseModel):
    id: str
    title: str


class WizardStateSchema(BaseModel):
    session_id: str
    step: int
    step_id: str
    step_title: str
    steps: list[StepSchema]
    booking: BookingSchema
    quote: QuoteSchema
    client_secret: str | None = None
    available_dates: list[date] = Field(default_factory=list)
    available_times: list[str] = Field(default_factory=list)
    submitted: bool = False
    order_id: str | None = None
    toasts: list[ToastSchema] = Field(default_factory=list)
    redirect_url: str | None = None

    @classmethod
    def from_result(cls, result: WizardResult) -> "WizardStateSchema":
        session = result.session
        quote = result.quote
        return cls(
            session_id=session.session_id,
            step=session.step,
            step_id=session.step_id,
            step_title=session.step_title,
            steps=[StepSchema(id=step_id, title=title) for step_id, title in STEPS],
            booking=BookingSchema.from_entity(session.booking),
            quote=QuoteSchema(
                unit_price=float(quote.unit_price),
                quantity=quote.quantity,
                subtotal=float(quote.subtotal),
                repaint_total=float(quote.repaint_total),
                total=float(quote.total),
            ),
            client_secret=session.client_secret,
            available_dates=list(session.available_dates),
            available_times=list(session.available_times),
            submitted=session.submitted,
            order_id=session.order_id,
            toasts=[ToastSchema(title=t.title, description=t.description, variant=t.variant) for t in result.toasts],
            redirect_url=result.redirect_url,
        )


class LoginRequestSchema(BaseModel):
    email: str
    password: str


class LoginResponseSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    expires_at: datetime


class OrderSchema(BaseModel):
    id: str
    customer_name: str
    email: str
    service_id: str
    service_name: str
    quantity: int
    repaint: bool
    delivery_method: str
    booking_date: date
    booking_time: str
    total_cost: float
    payment_ref: str
    status: str
    phone_number: str = ""
    pickup_address: str = ""
    notes: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, order: Order) -> "OrderSchema":
        data = {name: getattr(order, name) for name in cls.model_fields}
        data["total_cost"] = float(order.total_cost)
        return cls(**data)


class StatusUpdateSchema(BaseModel):
    status: OrderStatusLiteral


class StatsSchema(BaseModel):
    total_revenue: float
    active_orders: int
    total_customers: int

    @classmethod
    def from_entity(cls, stats: DashboardStats) -> "StatsSchema":
        return cls(
            total_revenue=float(stats.total_revenue),
            active_orders=stats.active_orders,
            total_customers=stats.total_customers,
        )


class ProjectionPointSchema(BaseModel):
    date: date
    revenue: float

    @classmethod
    def from_entity(cls, point: ProjectionPoint) -> "ProjectionPointSchema":
        return cls(date=point.date, revenue=float(point.revenue))


class OutboxEntrySchema(BaseModel):
    payment_ref: str
    status: str
    order_id: str | None = None
    order_written: bool
    slot_removed: bool
    attempts: int
    last_error: str | None = None
    customer_name: str
    booking_date: date | None = None
    booking_time: str | None = None
    total_cost: float

    @classmethod
    def from_entity(cls, entry: OutboxEntry) -> "OutboxEntrySchema":
        return cls(
            payment_ref=entry.payment_ref,
            status=entry.status,
            order_id=entry.order_id,
            order_written=entry.order_written,
            slot_removed=entry.slot_removed,
            attempts=entry.attempts,
            last_error=entry.last_error,
            customer_name=entry.booking.full_name,
            booking_date=entry.booking.booking_date,
            booking_time=entry.booking.booking_time,
            total_cost=float(entry.total_cost),
        )
