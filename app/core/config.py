from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "SneaksWash"
    BUSINESS_TIMEZONE: str = "Europe/London"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    CURRENCY: str = "gbp"
    REPAINT_UNIT_COST: Decimal = Decimal("20")
    BOOKING_MAX_QUANTITY: int | None = None
    # Unfinished wizard sessions older than this are removed when a new one starts; 0 keeps them
    WIZARD_SESSION_TTL_MINUTES: int = 1440

    STORE_PROVIDER: str = "memory"
    DATA_DIR: str = "./data"

    STRIPE_SECRET_KEY: str | None = None
    PAYMENT_RETURN_URL: str = "http://localhost:3000/book"

    ADMIN_EMAIL: str = "admin@sneakswash.com"
    ADMIN_PASSWORD_HASH: str | None = None
    AUTH_SECRET_KEY: str = "change-me"
    AUTH_TOKEN_TTL_MINUTES: int = 60


settings = Settings()
