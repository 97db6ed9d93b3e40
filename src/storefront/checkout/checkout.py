"""CheckoutRequest value object and the per-checkout state machine.

State Machine:
    IDLE → PREPARING → READY | REJECTED
    READY → SUBMITTING → COMMITTED | FAILED
    FAILED → READY (cart intact, resubmission allowed)
    COMMITTED and REJECTED are terminal for their CheckoutRequest.
"""

import json
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String, Text

from storefront.domain import storefront


class CheckoutStatus(Enum):
    IDLE = "Idle"
    PREPARING = "Preparing"
    READY = "Ready"
    REJECTED = "Rejected"
    SUBMITTING = "Submitting"
    COMMITTED = "Committed"
    FAILED = "Failed"


_VALID_TRANSITIONS = {
    CheckoutStatus.IDLE: {CheckoutStatus.PREPARING},
    CheckoutStatus.PREPARING: {CheckoutStatus.READY, CheckoutStatus.REJECTED},
    CheckoutStatus.READY: {CheckoutStatus.SUBMITTING},
    CheckoutStatus.SUBMITTING: {CheckoutStatus.COMMITTED, CheckoutStatus.FAILED},
    CheckoutStatus.FAILED: {CheckoutStatus.READY},
    CheckoutStatus.REJECTED: set(),  # Terminal
    CheckoutStatus.COMMITTED: set(),  # Terminal
}


def ensure_transition(current: CheckoutStatus, target: CheckoutStatus) -> None:
    if target not in _VALID_TRANSITIONS[current]:
        raise ValidationError({"status": [f"Invalid checkout transition from {current.value} to {target.value}"]})


@storefront.value_object
class CheckoutRequest:
    """Frozen, submittable snapshot of one category cart plus its delivery fee.

    Created once when the customer confirms checkout for a category and never
    changed afterwards; a new checkout produces a new request.
    """

    checkout_id = String(required=True, max_length=36)
    category_id = String(required=True, max_length=255)
    category_name = String(max_length=255)
    vendor_id = String(required=True, max_length=255)
    vendor_name = String(max_length=255)
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity, image}
    subtotal = Integer(required=True, min_value=0)
    delivery_fee = Integer(required=True, min_value=0)
    total = Integer(required=True, min_value=0)
    distance_km = Float(required=True, min_value=0.0)
    latitude = Float(required=True, min_value=-90.0, max_value=90.0)
    longitude = Float(required=True, min_value=-180.0, max_value=180.0)

    @invariant.post
    def total_must_be_subtotal_plus_fee(self):
        if None in (self.subtotal, self.delivery_fee, self.total):
            return
        if self.total != self.subtotal + self.delivery_fee:
            raise ValidationError({"total": ["Total must equal subtotal plus delivery fee"]})

    def line_items(self):
        return json.loads(self.items)

    def to_order_payload(self, customer):
        """Body for the order-placement endpoint: this request plus customer fields."""
        payload = {
            "customerName": customer.name,
            "phone": customer.phone,
            "address": customer.address,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "items": [
                {
                    "id": row["product_id"],
                    "name": row["name"],
                    "price": row["price"],
                    "quantity": row["quantity"],
                }
                for row in self.line_items()
            ],
            "subtotal": self.subtotal,
            "deliveryFee": self.delivery_fee,
            "distance": self.distance_km,
            "total": self.total,
            "categoryId": self.category_id,
            "chefId": self.vendor_id,
            "checkoutId": self.checkout_id,
        }
        if customer.email:
            payload["email"] = customer.email
        return payload
