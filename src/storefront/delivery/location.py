"""Cancellable acquisition of the customer's coordinate.

A position request ends in exactly one of three outcomes: resolved to a
point, denied (permission refused or geolocation unsupported), or timed out.
Callers cancel by cancelling the awaiting task; nothing is stored before the
request resolves.
"""

import asyncio
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from storefront.config import get_settings
from storefront.delivery.zone import GeoPoint
from storefront.domain import logger
from storefront.errors import ErrorKind


class LocationOutcome(Enum):
    RESOLVED = "Resolved"
    DENIED = "Denied"
    TIMED_OUT = "TimedOut"


@dataclass(frozen=True)
class LocationResult:
    outcome: LocationOutcome
    point: GeoPoint | None = None
    reason: str | None = None

    @property
    def resolved(self) -> bool:
        return self.outcome == LocationOutcome.RESOLVED

    @property
    def error(self) -> ErrorKind | None:
        return None if self.resolved else ErrorKind.COORDINATE_UNAVAILABLE


class LocationDenied(Exception):
    """The position source refused to provide a coordinate."""


class LocationSource(ABC):
    @abstractmethod
    async def current_position(self) -> GeoPoint:
        """Return the current position or raise LocationDenied."""
        ...


class FixedLocationSource(LocationSource):
    """A source that already knows its coordinate (saved address, device fix)."""

    def __init__(self, point: GeoPoint) -> None:
        self.point = point

    async def current_position(self) -> GeoPoint:
        return self.point


class ManualLocationSource(LocationSource):
    """Resolve a typed address by matching it against serviced localities."""

    SERVICED_LOCALITIES = ("kurla", "chunabhatti", "sion", "bkc")

    def __init__(self, address: str, center: GeoPoint | None = None) -> None:
        self.address = address
        self.center = center

    async def current_position(self) -> GeoPoint:
        text = (self.address or "").lower().strip()
        if not any(re.search(rf"\b{locality}\b", text) for locality in self.SERVICED_LOCALITIES):
            raise LocationDenied("We currently deliver only in Kurla West, Mumbai area.")

        if self.center is not None:
            return self.center
        settings = get_settings()
        return GeoPoint(latitude=settings.store_latitude, longitude=settings.store_longitude)


async def acquire_location(source: LocationSource, timeout: float | None = None) -> LocationResult:
    if timeout is None:
        timeout = get_settings().location_timeout_seconds

    try:
        point = await asyncio.wait_for(source.current_position(), timeout=timeout)
    except TimeoutError:
        logger.info("location.timed_out", timeout=timeout)
        return LocationResult(outcome=LocationOutcome.TIMED_OUT, reason="Location request timed out. Please try again.")
    except LocationDenied as exc:
        logger.info("location.denied", reason=str(exc))
        return LocationResult(outcome=LocationOutcome.DENIED, reason=str(exc))

    return LocationResult(outcome=LocationOutcome.RESOLVED, point=point)
