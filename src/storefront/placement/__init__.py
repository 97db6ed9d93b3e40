"""Order-placement factory.

Provides get_order_placement() / set_order_placement() to swap implementations:
- FakeOrderPlacement for development and testing
- HttpOrderPlacement for the real order service
"""

from storefront.config import get_settings
from storefront.placement.port import OrderPlacementPort

_current_placement: OrderPlacementPort | None = None


def get_order_placement() -> OrderPlacementPort:
    """Return the configured adapter, chosen by ORDER_PLACEMENT_ADAPTER."""
    global _current_placement
    if _current_placement is None:
        settings = get_settings()
        if settings.order_placement_adapter == "fake":
            from storefront.placement.fake_adapter import FakeOrderPlacement

            _current_placement = FakeOrderPlacement()
        elif settings.order_placement_adapter == "http":
            from storefront.placement.http_adapter import HttpOrderPlacement

            _current_placement = HttpOrderPlacement(settings.order_api_url, timeout=settings.http_timeout_seconds)
        else:
            raise ValueError(f"Unknown order placement adapter: {settings.order_placement_adapter}")
    return _current_placement


def set_order_placement(placement: OrderPlacementPort) -> None:
    """Override the active adapter (useful for tests)."""
    global _current_placement
    _current_placement = placement


def reset_order_placement() -> None:
    global _current_placement
    _current_placement = None
