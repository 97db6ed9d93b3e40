"""Fake order placement — deterministic order service for testing and development."""

from uuid import uuid4

from storefront.placement.port import OrderPlacementPort, PlacementResult


class FakeOrderPlacement(OrderPlacementPort):
    """Accepts every order by default and remembers what it received."""

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Order service unavailable"
        self.placed = []

    def configure(self, should_succeed: bool = True, failure_reason: str = "Order service unavailable"):
        """Configure the fake behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def place_order(self, request, customer) -> PlacementResult:
        if not self.should_succeed:
            return PlacementResult(success=False, failure_reason=self.failure_reason)

        self.placed.append(request.to_order_payload(customer))
        return PlacementResult(
            success=True,
            order_id=f"ord-{uuid4().hex[:8]}",
            status="pending",
        )
