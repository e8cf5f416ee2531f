from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from app.application.ports.order_store import OrderStorePort
from app.domain.entities.order import ACTIVE_STATUSES, ORDER_STATUSES, STATUS_CANCELLED, Order

SORT_OPTIONS = ("date-desc", "date-asc", "price-desc", "price-asc")
PROJECTION_PERIODS = {"7d": 7, "30d": 30, "90d": 90}
PRIORITY_LIMIT = 5


@dataclass(frozen=True)
class DashboardStats:
    total_revenue: Decimal
    active_orders: int
    total_customers: int


@dataclass(frozen=True)
class ProjectionPoint:
    date: date
    revenue: Decimal


class AdminOrdersUseCase:
    def __init__(self, orders: OrderStorePort) -> None:
        self._orders = orders
        self._logger = logging.getLogger(__name__)

    def list_orders(
        self,
        search: str | None = None,
        status: str | None = None,
        sort: str = "date-desc",
    ) -> list[Order]:
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort option: {sort}")
        if status is not None and status not in ORDER_STATUSES:
            raise ValueError(f"Unknown status: {status}")

        orders = self._orders.list_orders()
        if search and search.strip():
            needle = search.strip().lower()
            orders = [o for o in orders if needle in o.customer_name.lower()]
        if status:
            orders = [o for o in orders if o.status == status]

        field, direction = sort.split("-")
        if field == "date":
            return sorted(orders, key=lambda o: (o.booking_date, o.booking_time), reverse=direction == "desc")
        return sorted(orders, key=lambda o: o.total_cost, reverse=direction == "desc")

    def update_status(self, order_id: str, status: str) -> Order:
        if status not in ORDER_STATUSES:
            raise ValueError(f"Unknown status: {status}")
        order = self._orders.update_status(order_id, status)
        self._logger.info("Order status changed", extra={"order_id": order_id, "reason": status})
        return order

    def stats(self, now: datetime) -> DashboardStats:
        """Revenue this calendar month (by creation time), active orders, distinct customers."""
        orders = self._orders.list_orders()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        next_month = (month_start + timedelta(days=32)).replace(day=1)

        revenue = Decimal("0")
        for order in orders:
            if order.status == STATUS_CANCELLED or order.created_at is None:
                continue
            created = order.created_at.astimezone(now.tzinfo) if now.tzinfo else order.created_at
            if month_start <= created < next_month:
                revenue += order.total_cost

        return DashboardStats(
            total_revenue=revenue,
            active_orders=sum(1 for o in orders if o.status in ACTIVE_STATUSES),
            total_customers=len({o.email.lower() for o in orders}),
        )

    def projections(self, period: str, today: date) -> list[ProjectionPoint]:
        """Booked revenue per day for the next N days, one point per day including empty ones."""
        days = PROJECTION_PERIODS.get(period)
        if days is None:
            raise ValueError(f"Unknown projection period: {period}")

        totals: dict[date, Decimal] = {today + timedelta(days=i): Decimal("0") for i in range(days)}
        for order in self._orders.list_orders():
            if order.status == STATUS_CANCELLED:
                continue
            if order.booking_date in totals:
                totals[order.booking_date] += order.total_cost
        return [ProjectionPoint(date=d, revenue=totals[d]) for d in sorted(totals)]

    def priority_orders(self, today: date, limit: int = PRIORITY_LIMIT) -> list[Order]:
        """Pending or in-progress jobs booked from today onwards, soonest first."""
        upcoming = [
            o for o in self._orders.list_orders()
            if o.status in ACTIVE_STATUSES and o.booking_date >= today
        ]
        upcoming.sort(key=lambda o: (o.booking_date, o.booking_time))
        return upcoming[:limit]
