"""DeliveryZone aggregate with FeeTier entities and the GeoPoint value object.

A zone is a circle around the kitchen (center + outer boundary) split into
contiguous distance bands. Each band charges a base fee, optionally plus a
per-started-kilometre surcharge measured from the band's lower edge:

    fee(d) = base_fee + per_km_fee * ceil(d - min_km)

Bands are half-open ``[min_km, max_km)``; the final band is closed at the
outer boundary and may be open ended (``max_km`` unset).
"""

import math

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.config import get_settings
from storefront.domain import storefront

PRIMARY_ZONE_ID = "primary"


@storefront.value_object
class GeoPoint:
    """Latitude/longitude pair in decimal degrees."""

    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)

    @invariant.post
    def both_coordinates_required(self):
        if self.latitude is None or self.longitude is None:
            raise ValidationError({"coordinates": ["Both latitude and longitude are required"]})


@storefront.entity(part_of="DeliveryZone")
class FeeTier:
    """One distance band of a delivery zone and the fee charged inside it."""

    label = String(max_length=100)
    min_km = Float(required=True, min_value=0.0)
    max_km = Float(min_value=0.0)  # Unset means open ended
    base_fee = Integer(required=True, min_value=0)
    per_km_fee = Integer(default=0, min_value=0)

    def fee_for(self, distance_km):
        if not self.per_km_fee:
            return self.base_fee
        # Distances carry 2 decimals; round away float noise before ceil
        started_km = math.ceil(round(distance_km - self.min_km, 2))
        return self.base_fee + self.per_km_fee * max(started_km, 0)

    def to_config(self):
        return {
            "label": self.label,
            "min_km": self.min_km,
            "max_km": self.max_km,
            "base_fee": self.base_fee,
            "per_km_fee": self.per_km_fee,
        }


@storefront.aggregate
class DeliveryZone:
    zone_id = Identifier(identifier=True, required=True)
    name = String(max_length=255)
    center = ValueObject(GeoPoint, required=True)
    radius_km = Float(required=True, min_value=0.0)
    tiers = HasMany(FeeTier)

    @invariant.post
    def radius_must_be_positive(self):
        if self.radius_km is not None and self.radius_km <= 0:
            raise ValidationError({"radius_km": ["Delivery radius must be greater than zero"]})

    @invariant.post
    def tiers_must_cover_zone_without_gaps(self):
        tiers = self.ordered_tiers()
        if not tiers:
            return

        if tiers[0].min_km != 0:
            raise ValidationError({"tiers": ["The first fee tier must start at 0 km"]})

        for tier in tiers:
            if tier.max_km is not None and tier.max_km <= tier.min_km:
                raise ValidationError({"tiers": [f"Tier starting at {tier.min_km} km must end after it starts"]})

        for previous, tier in zip(tiers, tiers[1:], strict=False):
            if previous.max_km is None:
                raise ValidationError({"tiers": ["Only the last fee tier may be open ended"]})
            if tier.min_km != previous.max_km:
                raise ValidationError(
                    {"tiers": [f"Fee tiers must be contiguous: {previous.max_km} km is followed by {tier.min_km} km"]}
                )

        last = tiers[-1]
        if last.max_km is not None and self.radius_km is not None and last.max_km < self.radius_km:
            raise ValidationError({"tiers": ["The last fee tier must reach the delivery boundary"]})

    @invariant.post
    def fees_must_not_decrease_with_distance(self):
        tiers = self.ordered_tiers()
        for previous, tier in zip(tiers, tiers[1:], strict=False):
            if previous.max_km is None:
                continue
            if tier.fee_for(tier.min_km) < previous.fee_for(previous.max_km):
                raise ValidationError({"tiers": [f"Fee drops at {tier.min_km} km; fees may not decrease with distance"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def define(cls, center, radius_km, tiers, zone_id=PRIMARY_ZONE_ID, name=None):
        tiers = list(tiers)
        _require_tiers(tiers)
        return cls(
            zone_id=zone_id,
            name=name,
            center=center,
            radius_km=radius_km,
            tiers=tiers,
        )

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def ordered_tiers(self):
        return sorted(self.tiers or [], key=lambda t: t.min_km)

    def tier_for(self, distance_km):
        """Return the tier serving ``distance_km``, or None beyond the boundary."""
        if distance_km > self.radius_km:
            return None

        tiers = self.ordered_tiers()
        for tier in tiers:
            if tier.min_km <= distance_km and (tier.max_km is None or distance_km < tier.max_km):
                return tier

        # Only reachable at exactly max_km == radius_km of the final tier
        return tiers[-1]

    def to_config(self):
        return {
            "zone_id": str(self.zone_id),
            "name": self.name,
            "latitude": self.center.latitude,
            "longitude": self.center.longitude,
            "radius_km": self.radius_km,
            "tiers": [tier.to_config() for tier in self.ordered_tiers()],
        }

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------
    def reconfigure(self, center, radius_km, tiers, name=None):
        """Replace center, boundary and tiers in one step."""
        _require_tiers(tiers)
        with atomic_change(self):
            for tier in list(self.tiers):
                self.remove_tiers(tier)
            self.center = center
            self.radius_km = radius_km
            if name is not None:
                self.name = name
            for tier in tiers:
                self.add_tiers(tier)


def _require_tiers(tiers):
    if not tiers:
        raise ValidationError({"tiers": ["A delivery zone needs at least one fee tier"]})


def tiers_from_config(rows):
    """Build FeeTier entities from plain dicts (admin input, JSON payloads)."""
    return [
        FeeTier(
            label=row.get("label"),
            min_km=row["min_km"],
            max_km=row.get("max_km"),
            base_fee=row["base_fee"],
            per_km_fee=row.get("per_km_fee", 0),
        )
        for row in rows
    ]


def default_zone():
    """The zone described by settings: a flat base band, then a per-km band."""
    settings = get_settings()
    return DeliveryZone.define(
        center=GeoPoint(latitude=settings.store_latitude, longitude=settings.store_longitude),
        radius_km=settings.delivery_radius_km,
        name="Kurla West, Mumbai",
        tiers=[
            FeeTier(
                label="Base",
                min_km=0.0,
                max_km=settings.base_delivery_km,
                base_fee=settings.base_delivery_fee,
            ),
            FeeTier(
                label="Per km",
                min_km=settings.base_delivery_km,
                base_fee=settings.base_delivery_fee,
                per_km_fee=settings.per_km_delivery_fee,
            ),
        ],
    )
