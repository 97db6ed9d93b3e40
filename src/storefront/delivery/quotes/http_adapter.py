"""HTTP fee-quote adapter talking to the ``/delivery/calculate`` endpoint."""

import requests

from storefront.delivery.quotes.port import FeeQuote, FeeQuotePort, FeeQuoteResult
from storefront.domain import logger


class HttpFeeQuotes(FeeQuotePort):
    path = "/delivery/calculate"

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def quote(self, point) -> FeeQuoteResult:
        try:
            response = requests.post(
                f"{self.base_url}{self.path}",
                json={"latitude": point.latitude, "longitude": point.longitude},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("fee_quote.unreachable", error=str(exc))
            return FeeQuoteResult(success=False, failure_reason=f"Fee service unreachable: {exc}")

        if not response.ok:
            logger.warning("fee_quote.rejected", status_code=response.status_code)
            return FeeQuoteResult(
                success=False,
                failure_reason=f"Fee service returned HTTP {response.status_code}",
            )

        try:
            body = response.json()
            quote = FeeQuote(
                distance=float(body["distance"]),
                fee=int(body["fee"]),
                time=body.get("time"),
                serviceable=body.get("serviceable", True),
            )
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("fee_quote.malformed", error=str(exc))
            return FeeQuoteResult(success=False, failure_reason="Fee service returned a malformed response")

        return FeeQuoteResult(success=True, quote=quote)
