from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from app.domain.entities.booking import Booking
from app.domain.entities.order import STATUS_PENDING, Order
from app.domain.entities.outbox import OUTBOX_PENDING, OutboxEntry
from app.domain.entities.wizard_state import WizardSession


def _parse_date(value: Any) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def serialize_booking(booking: Booking) -> dict[str, Any]:
    """Serialize Booking to dict with ISO date strings."""
    return {
        "service_id": booking.service_id,
        "quantity": booking.quantity,
        "repaint": booking.repaint,
        "delivery_method": booking.delivery_method,
        "booking_date": booking.booking_date.isoformat() if booking.booking_date else None,
        "booking_time": booking.booking_time,
        "full_name": booking.full_name,
        "email": booking.email,
        "phone_number": booking.phone_number,
        "pickup_address": booking.pickup_address,
        "notes": booking.notes,
    }


def deserialize_booking(data: dict[str, Any]) -> Booking:
    return Booking(
        service_id=data.get("service_id"),
        quantity=int(data.get("quantity") or 1),
        repaint=bool(data.get("repaint", False)),
        delivery_method=data.get("delivery_method"),
        booking_date=_parse_date(data.get("booking_date")),
        booking_time=data.get("booking_time"),
        full_name=data.get("full_name") or "",
        email=data.get("email") or "",
        phone_number=data.get("phone_number") or "",
        pickup_address=data.get("pickup_address") or "",
        notes=data.get("notes") or "",
    )


def serialize_order(order: Order) -> dict[str, Any]:
    return {
        "id": order.id,
        "customer_name": order.customer_name,
        "email": order.email,
        "service_id": order.service_id,
        "service_name": order.service_name,
        "quantity": order.quantity,
        "repaint": order.repaint,
        "delivery_method": order.delivery_method,
        "booking_date": order.booking_date.isoformat(),
        "booking_time": order.booking_time,
        # Decimal as string to keep pence exact
        "total_cost": str(order.total_cost),
        "payment_ref": order.payment_ref,
        "status": order.status,
        "phone_number": order.phone_number,
        "pickup_address": order.pickup_address,
        "notes": order.notes,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }


def deserialize_order(data: dict[str, Any]) -> Order:
    return Order(
        id=data["id"],
        customer_name=data.get("customer_name", ""),
        email=data.get("email", ""),
        service_id=data.get("service_id", ""),
        service_name=data.get("service_name", ""),
        quantity=int(data.get("quantity") or 1),
        repaint=bool(data.get("repaint", False)),
        delivery_method=data.get("delivery_method", ""),
        booking_date=date.fromisoformat(data["booking_date"]),
        booking_time=data.get("booking_time", ""),
        total_cost=Decimal(data.get("total_cost") or "0"),
        payment_ref=data.get("payment_ref", ""),
        status=data.get("status", STATUS_PENDING),
        phone_number=data.get("phone_number", ""),
        pickup_address=data.get("pickup_address", ""),
        notes=data.get("notes", ""),
        created_at=_parse_datetime(data.get("created_at")),
    )


def serialize_wizard_session(session: WizardSession) -> dict[str, Any]:
    return {
        "session_id": session.session_id,
        "step": session.step,
        "booking": serialize_booking(session.booking),
        "client_secret": session.client_secret,
        "available_dates": [d.isoformat() for d in session.available_dates],
        "available_times": list(session.available_times),
        "submitted": session.submitted,
        "order_id": session.order_id,
        "payment_ref": session.payment_ref,
        "updated_at": session.updated_at,
    }


def deserialize_wizard_session(data: dict[str, Any]) -> WizardSession:
    dates = [_parse_date(d) for d in data.get("available_dates", [])]
    return WizardSession(
        session_id=data["session_id"],
        step=int(data.get("step", 0)),
        booking=deserialize_booking(data.get("booking", {})),
        client_secret=data.get("client_secret"),
        available_dates=tuple(d for d in dates if d is not None),
        available_times=tuple(data.get("available_times", [])),
        submitted=bool(data.get("submitted", False)),
        order_id=data.get("order_id"),
        payment_ref=data.get("payment_ref"),
        updated_at=data.get("updated_at"),
    )


def serialize_outbox_entry(entry: OutboxEntry) -> dict[str, Any]:
    return {
        "payment_ref": entry.payment_ref,
        "booking": serialize_booking(entry.booking),
        "total_cost": str(entry.total_cost),
        "service_name": entry.service_name,
        "status": entry.status,
        "order_id": entry.order_id,
        "order_written": entry.order_written,
        "slot_removed": entry.slot_removed,
        "attempts": entry.attempts,
        "last_error": entry.last_error,
        "created_at": entry.created_at,
        "updated_at": entry.updated_at,
    }


def deserialize_outbox_entry(data: dict[str, Any]) -> OutboxEntry:
    return OutboxEntry(
        payment_ref=data["payment_ref"],
        booking=deserialize_booking(data.get("booking", {})),
        total_cost=Decimal(data.get("total_cost") or "0"),
        service_name=data.get("service_name", ""),
        status=data.get("status", OUTBOX_PENDING),
        order_id=data.get("order_id"),
        order_written=bool(data.get("order_written", False)),
        slot_removed=bool(data.get("slot_removed", False)),
        attempts=int(data.get("attempts", 0)),
        last_error=data.get("last_error"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
    )
