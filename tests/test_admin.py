"""
Tests for admin sign-in and the order back-office queries.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import AuthenticationError, OrderNotFoundError
from app.application.use_cases.admin_auth import INVALID_CREDENTIALS, AdminAuthUseCase
from app.application.use_cases.admin_orders import AdminOrdersUseCase
from app.domain.entities.order import Order
from app.infrastructure.auth.passwords import hash_password, verify_password
from app.infrastructure.auth.tokens import TokenService
from app.infrastructure.store.memory_store import MemoryOrderStore, MemorySessionStore

LONDON = ZoneInfo("Europe/London")
ADMIN_EMAIL = "admin@sneakswash.com"
PASSWORD = "correct horse battery staple"


class SeededOrderStore(MemoryOrderStore):
    def __init__(self, orders: list[Order]) -> None:
        super().__init__()
        self._orders = {o.id: o for o in orders}


def _order(order_id: str, **kwargs) -> Order:
    base = dict(
        id=order_id,
        customer_name="Jordan Smith",
        email="jordan@example.com",
        service_id="standard",
        service_name="Standard",
        quantity=1,
        repaint=False,
        delivery_method="dropoff",
        booking_date=date(2030, 3, 14),
        booking_time="09:00",
        total_cost=Decimal("30"),
        payment_ref=f"pi_{order_id}",
        created_at=datetime(2030, 3, 10, 12, 0, tzinfo=timezone.utc),
    )
    base.update(kwargs)
    return Order(**base)


def _auth(password_hash: str | None = None, ttl_minutes: int = 60) -> AdminAuthUseCase:
    return AdminAuthUseCase(
        tokens=TokenService("test-secret", ttl_minutes=ttl_minutes),
        sessions=MemorySessionStore(),
        admin_email=ADMIN_EMAIL,
        admin_password_hash=password_hash if password_hash is not None else hash_password(PASSWORD),
    )


# --- auth ---


def test_password_hash_roundtrip():
    password_hash = hash_password(PASSWORD)

    assert password_hash != PASSWORD
    assert verify_password(PASSWORD, password_hash)
    assert not verify_password("wrong", password_hash)
    assert not verify_password(PASSWORD, "not-a-hash")


def test_login_and_resolve():
    auth = _auth()

    session = auth.login("  Admin@SneaksWash.com ", PASSWORD)
    resolved = auth.resolve(session.token)

    assert resolved.email == ADMIN_EMAIL
    assert resolved.is_admin
    assert resolved.expires_at > resolved.issued_at


@pytest.mark.parametrize(
    "email,password",
    [
        (ADMIN_EMAIL, "wrong"),
        ("someone@sneakswash.com", PASSWORD),
    ],
)
def test_login_rejects_bad_credentials(email, password):
    auth = _auth()

    with pytest.raises(AuthenticationError) as exc:
        auth.login(email, password)

    assert str(exc.value) == INVALID_CREDENTIALS


def test_login_disabled_without_password_hash():
    auth = _auth(password_hash="")

    with pytest.raises(AuthenticationError):
        auth.login(ADMIN_EMAIL, "")


def test_logout_revokes_token():
    auth = _auth()
    session = auth.login(ADMIN_EMAIL, PASSWORD)

    auth.logout(session)

    with pytest.raises(AuthenticationError):
        auth.resolve(session.token)


def test_expired_token_is_rejected():
    tokens = TokenService("test-secret", ttl_minutes=5)
    auth = AdminAuthUseCase(tokens, MemorySessionStore(), ADMIN_EMAIL, hash_password(PASSWORD))
    token, _ = tokens.issue(ADMIN_EMAIL, "admin", now=datetime.now(timezone.utc) - timedelta(hours=1))

    with pytest.raises(AuthenticationError):
        auth.resolve(token)


def test_token_without_admin_role_is_rejected():
    tokens = TokenService("test-secret")
    auth = AdminAuthUseCase(tokens, MemorySessionStore(), ADMIN_EMAIL, hash_password(PASSWORD))
    token, _ = tokens.issue("staff@sneakswash.com", "staff")

    with pytest.raises(AuthenticationError):
        auth.resolve(token)


def test_token_signed_with_other_key_is_rejected():
    auth = _auth()
    token, _ = TokenService("another-secret").issue(ADMIN_EMAIL, "admin")

    with pytest.raises(AuthenticationError):
        auth.resolve(token)


# --- orders ---


def test_search_is_case_insensitive_on_customer_name():
    uc = AdminOrdersUseCase(
        SeededOrderStore([_order("a", customer_name="Jordan Smith"), _order("b", customer_name="Sam Lee")])
    )

    assert [o.id for o in uc.list_orders(search="SMITH")] == ["a"]
    assert len(uc.list_orders(search="   ")) == 2


def test_status_filter_and_sorts():
    uc = AdminOrdersUseCase(
        SeededOrderStore(
            [
                _order("early", booking_date=date(2030, 3, 1), total_cost=Decimal("90")),
                _order("late", booking_date=date(2030, 3, 20), total_cost=Decimal("30")),
                _order("mid", booking_date=date(2030, 3, 10), total_cost=Decimal("60"), status="Completed"),
            ]
        )
    )

    assert [o.id for o in uc.list_orders()] == ["late", "mid", "early"]
    assert [o.id for o in uc.list_orders(sort="date-asc")] == ["early", "mid", "late"]
    assert [o.id for o in uc.list_orders(sort="price-desc")] == ["early", "mid", "late"]
    assert [o.id for o in uc.list_orders(sort="price-asc")] == ["late", "mid", "early"]
    assert [o.id for o in uc.list_orders(status="Completed")] == ["mid"]

    with pytest.raises(ValueError):
        uc.list_orders(sort="name-asc")


def test_update_status():
    store = SeededOrderStore([_order("a")])
    uc = AdminOrdersUseCase(store)

    assert uc.update_status("a", "In Progress").status == "In Progress"
    assert store.get_order("a").status == "In Progress"

    with pytest.raises(ValueError):
        uc.update_status("a", "Lost")
    with pytest.raises(OrderNotFoundError):
        uc.update_status("zzz", "Completed")


def test_stats_for_current_month():
    uc = AdminOrdersUseCase(
        SeededOrderStore(
            [
                _order("a", total_cost=Decimal("30"), email="jordan@example.com"),
                _order("b", total_cost=Decimal("45.50"), email="JORDAN@example.com", status="In Progress"),
                _order("c", total_cost=Decimal("100"), email="sam@example.com", status="Cancelled"),
                _order(
                    "d",
                    total_cost=Decimal("70"),
                    email="alex@example.com",
                    status="Completed",
                    created_at=datetime(2030, 2, 27, 9, 0, tzinfo=timezone.utc),
                ),
                # 23:30 UTC on 31 March is 00:30 on 1 April in London (BST)
                _order(
                    "e",
                    total_cost=Decimal("20"),
                    email="alex@example.com",
                    created_at=datetime(2030, 3, 31, 23, 30, tzinfo=timezone.utc),
                ),
            ]
        )
    )

    stats = uc.stats(datetime(2030, 3, 20, 12, 0, tzinfo=LONDON))

    assert stats.total_revenue == Decimal("75.50")
    assert stats.active_orders == 3
    assert stats.total_customers == 3


def test_projections_cover_every_day():
    uc = AdminOrdersUseCase(
        SeededOrderStore(
            [
                _order("a", booking_date=date(2030, 3, 14), total_cost=Decimal("40")),
                _order("b", booking_date=date(2030, 3, 16), total_cost=Decimal("30")),
                _order("c", booking_date=date(2030, 3, 16), total_cost=Decimal("30")),
                _order("d", booking_date=date(2030, 3, 15), total_cost=Decimal("99"), status="Cancelled"),
                _order("e", booking_date=date(2030, 3, 21), total_cost=Decimal("50")),
            ]
        )
    )

    points = uc.projections("7d", today=date(2030, 3, 14))

    assert [p.date for p in points] == [date(2030, 3, 14) + timedelta(days=i) for i in range(7)]
    assert {p.date: p.revenue for p in points if p.revenue} == {
        date(2030, 3, 14): Decimal("40"),
        date(2030, 3, 16): Decimal("60"),
    }
    assert len(uc.projections("90d", today=date(2030, 3, 14))) == 90

    with pytest.raises(ValueError):
        uc.projections("1y", today=date(2030, 3, 14))


def test_priority_orders_are_upcoming_active_soonest_first():
    uc = AdminOrdersUseCase(
        SeededOrderStore(
            [
                _order("past", booking_date=date(2030, 3, 1)),
                _order("done", booking_date=date(2030, 3, 15), status="Completed"),
                _order("later", booking_date=date(2030, 3, 18), booking_time="09:00"),
                _order("soon_pm", booking_date=date(2030, 3, 15), booking_time="15:00", status="In Progress"),
                _order("soon_am", booking_date=date(2030, 3, 15), booking_time="09:00"),
            ]
        )
    )

    priority = uc.priority_orders(today=date(2030, 3, 14))

    assert [o.id for o in priority] == ["soon_am", "soon_pm", "later"]
    assert len(uc.priority_orders(today=date(2030, 3, 14), limit=1)) == 1
