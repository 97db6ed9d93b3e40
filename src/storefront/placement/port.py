"""Order-placement port (abstract interface).

The order-management service that owns everything after submission sits
behind this port. Checkout code programs against it; adapters are swapped
via configuration (FakeOrderPlacement for dev/test, HttpOrderPlacement in
production).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PlacementResult:
    """Result of an order-placement attempt."""

    success: bool
    order_id: str | None = None
    status: str | None = None
    failure_reason: str | None = None


class OrderPlacementPort(ABC):
    @abstractmethod
    def place_order(self, request, customer) -> PlacementResult:
        """Submit a CheckoutRequest with the customer's identity fields.

        Transport problems and non-success responses come back as a failed
        PlacementResult, never as an exception.
        """
        ...
