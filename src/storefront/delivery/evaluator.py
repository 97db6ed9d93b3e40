"""DeliveryZoneEvaluator — is a point serviceable, and at what fee and ETA.

The evaluator is a pure function of its input and the zone returned by its
provider. The provider is consulted on every call, so an admin update to the
zone is picked up without rebuilding the evaluator.
"""

import math
from dataclasses import dataclass

from shared.geo import haversine_km

from storefront.domain import logger


@dataclass(frozen=True)
class ZoneEvaluation:
    """Outcome of evaluating one point against the delivery zone."""

    serviceable: bool
    distance_km: float
    fee: int
    eta_minutes: int | None
    message: str


def estimated_minutes(distance_km):
    """Kitchen prep plus riding time: 15 minutes + 2 minutes per km."""
    return math.ceil(distance_km * 2 + 15)


class DeliveryZoneEvaluator:
    def __init__(self, zone=None, zone_provider=None):
        if (zone is None) == (zone_provider is None):
            raise ValueError("Provide exactly one of zone or zone_provider")
        self._zone_provider = zone_provider if zone_provider is not None else (lambda: zone)

    @property
    def zone(self):
        return self._zone_provider()

    @staticmethod
    def distance_km(point_a, point_b):
        return haversine_km(point_a, point_b)

    def evaluate(self, point):
        zone = self.zone
        distance = self.distance_km(zone.center, point)

        tier = zone.tier_for(distance)
        if tier is None:
            logger.info(
                "delivery.outside_zone",
                zone_id=str(zone.zone_id),
                distance_km=distance,
                radius_km=zone.radius_km,
            )
            return ZoneEvaluation(
                serviceable=False,
                distance_km=distance,
                fee=0,
                eta_minutes=None,
                message=(
                    f"Coming soon to your area! We currently deliver within "
                    f"{zone.radius_km:g} km of {zone.name or 'our kitchen'}."
                ),
            )

        fee = tier.fee_for(distance)
        return ZoneEvaluation(
            serviceable=True,
            distance_km=distance,
            fee=fee,
            eta_minutes=estimated_minutes(distance),
            message=f"Delivery available: {distance} km away, delivery fee {fee}.",
        )
