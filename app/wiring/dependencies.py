from functools import lru_cache
import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.application.ports.availability import AvailabilityPort
from app.application.ports.order_store import OrderStorePort
from app.application.ports.outbox import OutboxPort
from app.application.ports.payment_gateway import PaymentGatewayPort
from app.application.ports.service_catalog import ServiceCatalogPort
from app.application.ports.session_store import SessionStorePort
from app.application.ports.wizard_store import WizardStorePort
from app.application.use_cases.admin_auth import AdminAuthUseCase
from app.application.use_cases.admin_orders import AdminOrdersUseCase
from app.application.use_cases.booking_wizard import BookingWizardUseCase
from app.application.use_cases.complete_booking import CompleteBookingUseCase
from app.infrastructure.auth.tokens import TokenService
from app.infrastructure.availability.json_availability import JsonAvailability
from app.infrastructure.availability.memory_availability import MemoryAvailability
from app.infrastructure.catalog.service_catalog_store import ServiceCatalogStore
from app.infrastructure.payments.mock_gateway import MockPaymentGateway
from app.infrastructure.payments.stripe_gateway import StripePaymentGateway
from app.infrastructure.store.json_store import (
    JsonOrderStore,
    JsonOutbox,
    JsonSessionStore,
    JsonWizardStore,
)
from app.infrastructure.store.memory_store import (
    MemoryOrderStore,
    MemoryOutbox,
    MemorySessionStore,
    MemoryWizardStore,
)


logger = logging.getLogger(__name__)


def _use_json_store() -> bool:
    return settings.STORE_PROVIDER.lower() == "json"


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_service_catalog() -> ServiceCatalogPort:
    return ServiceCatalogStore(repaint_unit_cost=settings.REPAINT_UNIT_COST)


@lru_cache
def get_availability() -> AvailabilityPort:
    if _use_json_store():
        return JsonAvailability(data_dir=settings.DATA_DIR)
    if settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using seeded MemoryAvailability (ENV=dev/local)")
        return MemoryAvailability.seeded(datetime.now(get_timezone()).date())
    return MemoryAvailability()


@lru_cache
def get_wizard_store() -> WizardStorePort:
    if _use_json_store():
        return JsonWizardStore(data_dir=settings.DATA_DIR)
    return MemoryWizardStore()


@lru_cache
def get_order_store() -> OrderStorePort:
    if _use_json_store():
        return JsonOrderStore(data_dir=settings.DATA_DIR)
    return MemoryOrderStore()


@lru_cache
def get_outbox() -> OutboxPort:
    if _use_json_store():
        return JsonOutbox(data_dir=settings.DATA_DIR)
    return MemoryOutbox()


@lru_cache
def get_session_store() -> SessionStorePort:
    if _use_json_store():
        return JsonSessionStore(data_dir=settings.DATA_DIR)
    return MemorySessionStore()


@lru_cache
def get_payment_gateway() -> PaymentGatewayPort:
    if not settings.STRIPE_SECRET_KEY:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockPaymentGateway (key missing, ENV=dev/local)")
            return MockPaymentGateway()
        raise ValueError("STRIPE_SECRET_KEY is required to take payments.")
    return StripePaymentGateway()


def get_complete_booking_use_case() -> CompleteBookingUseCase:
    return CompleteBookingUseCase(
        orders=get_order_store(),
        availability=get_availability(),
        outbox=get_outbox(),
    )


def get_booking_wizard_use_case() -> BookingWizardUseCase:
    return BookingWizardUseCase(
        store=get_wizard_store(),
        catalog=get_service_catalog(),
        availability=get_availability(),
        payments=get_payment_gateway(),
        complete_booking=get_complete_booking_use_case(),
        timezone=get_timezone(),
        return_url=settings.PAYMENT_RETURN_URL,
        max_quantity=settings.BOOKING_MAX_QUANTITY,
        session_ttl_seconds=settings.WIZARD_SESSION_TTL_MINUTES * 60,
    )


def get_admin_auth_use_case() -> AdminAuthUseCase:
    return AdminAuthUseCase(
        tokens=TokenService(settings.AUTH_SECRET_KEY, ttl_minutes=settings.AUTH_TOKEN_TTL_MINUTES),
        sessions=get_session_store(),
        admin_email=settings.ADMIN_EMAIL,
        admin_password_hash=settings.ADMIN_PASSWORD_HASH,
    )


def get_admin_orders_use_case() -> AdminOrdersUseCase:
    return AdminOrdersUseCase(orders=get_order_store())
