"""Fee-quote factory.

Provides get_fee_quotes() / set_fee_quotes() to swap implementations:
- LocalFeeQuotes evaluates in-process against the current zone
- HttpFeeQuotes calls the storefront's fee-confirmation endpoint
"""

from storefront.config import get_settings
from storefront.delivery.quotes.port import FeeQuotePort

_current_quotes: FeeQuotePort | None = None


def get_fee_quotes() -> FeeQuotePort:
    """Return the configured fee-quote adapter, chosen by FEE_QUOTE_ADAPTER."""
    global _current_quotes
    if _current_quotes is None:
        settings = get_settings()
        if settings.fee_quote_adapter == "local":
            from storefront.delivery.evaluator import DeliveryZoneEvaluator
            from storefront.delivery.management import current_zone
            from storefront.delivery.quotes.local_adapter import LocalFeeQuotes

            _current_quotes = LocalFeeQuotes(DeliveryZoneEvaluator(zone_provider=current_zone))
        elif settings.fee_quote_adapter == "http":
            from storefront.delivery.quotes.http_adapter import HttpFeeQuotes

            _current_quotes = HttpFeeQuotes(settings.fee_api_url, timeout=settings.http_timeout_seconds)
        else:
            raise ValueError(f"Unknown fee quote adapter: {settings.fee_quote_adapter}")
    return _current_quotes


def set_fee_quotes(quotes: FeeQuotePort) -> None:
    """Override the active fee-quote adapter (useful for tests)."""
    global _current_quotes
    _current_quotes = quotes


def reset_fee_quotes() -> None:
    global _current_quotes
    _current_quotes = None
