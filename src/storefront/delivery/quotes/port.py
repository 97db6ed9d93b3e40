"""Fee-quote port — server-authoritative delivery fee confirmation.

The in-process evaluator is advisory; before an order is submitted the fee
is confirmed through this port. Adapters never raise for transport problems:
they report them as a failed FeeQuoteResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class FeeQuote:
    distance: float
    fee: int
    time: int | None
    serviceable: bool = True


@dataclass(frozen=True)
class FeeQuoteResult:
    success: bool
    quote: FeeQuote | None = None
    failure_reason: str | None = None


class FeeQuotePort(ABC):
    @abstractmethod
    def quote(self, point) -> FeeQuoteResult:
        """Ask for the distance, fee and ETA (minutes) to deliver to ``point``."""
        ...
