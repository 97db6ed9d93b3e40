"""Storefront bounded context — category carts, delivery zones and checkout.

Holds the cart/checkout eligibility engine: per-category carts bound to a
single vendor, the delivery-zone fee evaluator, and the checkout flow that
turns one category cart into an order request.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
