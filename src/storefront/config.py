"""Runtime settings for the storefront, read from environment variables."""

import os
from dataclasses import dataclass


def _get_env(key: str, default: str | None = None) -> str | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def _get_float(key: str, default: float) -> float:
    return float(_get_env(key, default=str(default)))


def _get_int(key: str, default: int) -> int:
    return int(_get_env(key, default=str(default)))


@dataclass(frozen=True)
class Settings:
    store_latitude: float
    store_longitude: float
    delivery_radius_km: float
    base_delivery_fee: int
    base_delivery_km: float
    per_km_delivery_fee: int
    default_min_order_amount: int
    order_api_url: str
    fee_api_url: str
    http_timeout_seconds: float
    location_timeout_seconds: float
    order_placement_adapter: str
    fee_quote_adapter: str


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings(
            store_latitude=_get_float("STORE_LATITUDE", 19.0728),
            store_longitude=_get_float("STORE_LONGITUDE", 72.8826),
            delivery_radius_km=_get_float("DELIVERY_RADIUS_KM", 10.0),
            base_delivery_fee=_get_int("BASE_DELIVERY_FEE", 20),
            base_delivery_km=_get_float("BASE_DELIVERY_KM", 2.0),
            per_km_delivery_fee=_get_int("PER_KM_DELIVERY_FEE", 10),
            default_min_order_amount=_get_int("DEFAULT_MIN_ORDER_AMOUNT", 100),
            order_api_url=_get_env("ORDER_API_URL", default="http://localhost:5000"),
            fee_api_url=_get_env("FEE_API_URL", default="http://localhost:8000"),
            http_timeout_seconds=_get_float("HTTP_TIMEOUT_SECONDS", 10.0),
            location_timeout_seconds=_get_float("LOCATION_TIMEOUT_SECONDS", 10.0),
            order_placement_adapter=_get_env("ORDER_PLACEMENT_ADAPTER", default="fake"),
            fee_quote_adapter=_get_env("FEE_QUOTE_ADAPTER", default="local"),
        )
    return _settings


def reset_settings() -> None:
    """Drop cached settings so the next call re-reads the environment (tests)."""
    global _settings
    _settings = None
