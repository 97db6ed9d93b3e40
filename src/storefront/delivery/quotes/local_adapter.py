"""In-process fee-quote adapter backed by a DeliveryZoneEvaluator."""

from storefront.delivery.quotes.port import FeeQuote, FeeQuotePort, FeeQuoteResult


class LocalFeeQuotes(FeeQuotePort):
    """Answers quotes locally; used in development and tests."""

    def __init__(self, evaluator) -> None:
        self.evaluator = evaluator
        self.should_succeed = True
        self.failure_reason = "Fee service unavailable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Fee service unavailable"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def quote(self, point) -> FeeQuoteResult:
        if not self.should_succeed:
            return FeeQuoteResult(success=False, failure_reason=self.failure_reason)

        evaluation = self.evaluator.evaluate(point)
        return FeeQuoteResult(
            success=True,
            quote=FeeQuote(
                distance=evaluation.distance_km,
                fee=evaluation.fee,
                time=evaluation.eta_minutes,
                serviceable=evaluation.serviceable,
            ),
        )
