"""CheckoutOrchestrator — turns one category cart into an order request.

prepare_checkout() validates the cart and the delivery point, confirms the fee
through the fee-quote port and freezes the result into a CheckoutRequest.
commit_checkout() hands that request to the order-placement port and clears
the category's cart only after the port reports success, so a failed
submission can be retried without re-adding items.
"""

import json
from dataclasses import dataclass
from uuid import uuid4

from protean.exceptions import ValidationError

from storefront.checkout.checkout import CheckoutRequest, CheckoutStatus, ensure_transition
from storefront.delivery.evaluator import ZoneEvaluation
from storefront.delivery.quotes import get_fee_quotes
from storefront.domain import logger
from storefront.errors import ErrorKind
from storefront.placement import get_order_placement


@dataclass(frozen=True)
class CheckoutRejection:
    checkout_id: str
    error: ErrorKind
    message: str
    evaluation: ZoneEvaluation | None = None


@dataclass(frozen=True)
class CommitResult:
    success: bool
    status: CheckoutStatus
    order_id: str | None = None
    error: ErrorKind | None = None
    message: str | None = None


@dataclass(frozen=True)
class CartSummary:
    """What the cart panel shows; the fee is None until a location is known."""

    category_id: str
    total_items: int
    subtotal: int
    min_order_amount: int
    meets_minimum: bool
    delivery_fee: int | None
    total: int | None
    message: str | None = None


class CheckoutOrchestrator:
    def __init__(self, registry, evaluator, placement=None, fee_quotes=None):
        self.registry = registry
        self.evaluator = evaluator
        self.placement = placement if placement is not None else get_order_placement()
        # The quote service is authoritative over the local evaluator
        self.fee_quotes = fee_quotes if fee_quotes is not None else get_fee_quotes()
        self._statuses: dict[str, CheckoutStatus] = {}

    def status(self, checkout_id) -> CheckoutStatus:
        return self._statuses.get(checkout_id, CheckoutStatus.IDLE)

    # -------------------------------------------------------------------
    # Prepare
    # -------------------------------------------------------------------
    def prepare_checkout(self, category_id, point) -> CheckoutRequest | CheckoutRejection:
        checkout_id = str(uuid4())
        self._move(checkout_id, CheckoutStatus.PREPARING)

        validated = self.registry.get_cart_with_validation(category_id)
        if validated is None:
            return self._reject(checkout_id, category_id, ErrorKind.EMPTY_CART, "Your cart for this category is empty.")

        evaluation = self.evaluator.evaluate(point)
        if not evaluation.serviceable:
            return self._reject(
                checkout_id, category_id, ErrorKind.OUTSIDE_SERVICE_AREA, evaluation.message, evaluation
            )

        if not validated.meets_minimum:
            return self._reject(
                checkout_id,
                category_id,
                ErrorKind.BELOW_MINIMUM_ORDER,
                f"Minimum order for {validated.cart.category_name or category_id} is {validated.min_order_amount}; "
                f"add {validated.min_order_amount - validated.subtotal} more.",
                evaluation,
            )

        result = self.fee_quotes.quote(point)
        if not result.success:
            return self._reject(
                checkout_id,
                category_id,
                ErrorKind.NETWORK_FAILURE,
                "Could not confirm the delivery fee. Please try again.",
                evaluation,
            )
        if not result.quote.serviceable:
            return self._reject(
                checkout_id,
                category_id,
                ErrorKind.OUTSIDE_SERVICE_AREA,
                "The location seems outside our delivery area.",
                evaluation,
            )
        fee, distance = result.quote.fee, result.quote.distance

        cart = validated.cart
        request = CheckoutRequest(
            checkout_id=checkout_id,
            category_id=str(cart.category_id),
            category_name=cart.category_name,
            vendor_id=str(cart.vendor_id),
            vendor_name=cart.vendor_name,
            items=json.dumps([item.to_snapshot() for item in cart.items]),
            subtotal=validated.subtotal,
            delivery_fee=fee,
            total=validated.subtotal + fee,
            distance_km=distance,
            latitude=point.latitude,
            longitude=point.longitude,
        )
        self._move(checkout_id, CheckoutStatus.READY)
        logger.info(
            "checkout.ready",
            checkout_id=checkout_id,
            category_id=str(category_id),
            subtotal=request.subtotal,
            delivery_fee=request.delivery_fee,
        )
        return request

    # -------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------
    def commit_checkout(self, request, customer) -> CommitResult:
        """Submit ``request``; raises ValidationError if it is not ready for submission."""
        checkout_id = request.checkout_id
        if checkout_id not in self._statuses:
            raise ValidationError({"checkout_id": [f"Unknown checkout {checkout_id}"]})

        if self.status(checkout_id) == CheckoutStatus.FAILED:
            self._move(checkout_id, CheckoutStatus.READY)
        self._move(checkout_id, CheckoutStatus.SUBMITTING)

        result = self.placement.place_order(request, customer)
        if not result.success:
            self._move(checkout_id, CheckoutStatus.FAILED)
            logger.warning("checkout.failed", checkout_id=checkout_id, reason=result.failure_reason)
            return CommitResult(
                success=False,
                status=CheckoutStatus.FAILED,
                error=ErrorKind.NETWORK_FAILURE,
                message=result.failure_reason or "There was an error placing your order. Please try again.",
            )

        self._move(checkout_id, CheckoutStatus.COMMITTED)
        self.registry.clear_cart(request.category_id)
        logger.info("checkout.committed", checkout_id=checkout_id, order_id=result.order_id)
        return CommitResult(success=True, status=CheckoutStatus.COMMITTED, order_id=result.order_id)

    # -------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------
    def summarize(self, category_id, point=None) -> CartSummary | None:
        validated = self.registry.get_cart_with_validation(category_id)
        if validated is None:
            return None

        fee = total = None
        message = "Delivery fee is calculated at checkout."
        if point is not None:
            evaluation = self.evaluator.evaluate(point)
            message = evaluation.message
            if evaluation.serviceable:
                fee = evaluation.fee
                total = validated.subtotal + fee

        return CartSummary(
            category_id=str(category_id),
            total_items=validated.cart.total_items,
            subtotal=validated.subtotal,
            min_order_amount=validated.min_order_amount,
            meets_minimum=validated.meets_minimum,
            delivery_fee=fee,
            total=total,
            message=message,
        )

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _move(self, checkout_id, target):
        ensure_transition(self.status(checkout_id), target)
        self._statuses[checkout_id] = target

    def _reject(self, checkout_id, category_id, error, message, evaluation=None):
        self._move(checkout_id, CheckoutStatus.REJECTED)
        logger.info("checkout.rejected", checkout_id=checkout_id, category_id=str(category_id), error=error.value)
        return CheckoutRejection(checkout_id=checkout_id, error=error, message=message, evaluation=evaluation)
