"""HTTP order-placement adapter — POSTs checkout requests to ``/api/orders``."""

import requests

from storefront.domain import logger
from storefront.placement.port import OrderPlacementPort, PlacementResult


class HttpOrderPlacement(OrderPlacementPort):
    path = "/api/orders"

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def place_order(self, request, customer) -> PlacementResult:
        try:
            response = requests.post(
                f"{self.base_url}{self.path}",
                json=request.to_order_payload(customer),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("placement.unreachable", checkout_id=request.checkout_id, error=str(exc))
            return PlacementResult(success=False, failure_reason=f"Order service unreachable: {exc}")

        if not response.ok:
            logger.warning(
                "placement.rejected",
                checkout_id=request.checkout_id,
                status_code=response.status_code,
            )
            return PlacementResult(
                success=False,
                failure_reason=f"Order service returned HTTP {response.status_code}",
            )

        try:
            body = response.json()
            order_id = str(body["id"])
        except (ValueError, KeyError, TypeError):
            return PlacementResult(success=False, failure_reason="Order service returned a malformed response")

        return PlacementResult(success=True, order_id=order_id, status=body.get("status", "pending"))
