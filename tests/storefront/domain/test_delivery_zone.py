"""Tests for the DeliveryZone aggregate, its fee tiers and GeoPoint."""

import pytest
from protean.exceptions import ValidationError

from storefront.delivery.zone import (
    PRIMARY_ZONE_ID,
    DeliveryZone,
    FeeTier,
    GeoPoint,
    default_zone,
    tiers_from_config,
)


def _zone(center, tiers, radius_km=10.0):
    return DeliveryZone.define(center=center, radius_km=radius_km, tiers=tiers)


class TestGeoPoint:
    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=91.0, longitude=72.0)

    def test_longitude_range(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=19.0, longitude=181.0)

    def test_both_coordinates_required(self):
        with pytest.raises(ValidationError):
            GeoPoint(latitude=19.0)


class TestFeeTier:
    def test_flat_tier_charges_base_fee(self):
        tier = FeeTier(min_km=0.0, max_km=2.0, base_fee=20)
        assert tier.fee_for(0.0) == 20
        assert tier.fee_for(1.99) == 20

    def test_per_km_tier_charges_started_kilometres(self):
        tier = FeeTier(min_km=2.0, base_fee=20, per_km_fee=10)
        assert tier.fee_for(2.0) == 20
        assert tier.fee_for(2.01) == 30
        assert tier.fee_for(3.0) == 30
        assert tier.fee_for(3.4) == 40

    def test_per_km_fee_defaults_to_zero(self):
        assert FeeTier(min_km=0.0, base_fee=25).per_km_fee == 0


class TestZoneDefinition:
    def test_define_uses_primary_zone_id(self, zone):
        assert str(zone.zone_id) == PRIMARY_ZONE_ID
        assert zone.radius_km == 10.0
        assert len(zone.tiers) == 2

    def test_tiers_come_back_ordered(self, center):
        zone = _zone(
            center,
            [
                FeeTier(min_km=2.0, base_fee=30),
                FeeTier(min_km=0.0, max_km=2.0, base_fee=20),
            ],
        )
        assert [t.min_km for t in zone.ordered_tiers()] == [0.0, 2.0]

    def test_to_config(self, zone):
        config = zone.to_config()
        assert config["latitude"] == 19.0728
        assert config["longitude"] == 72.8826
        assert config["radius_km"] == 10.0
        assert config["tiers"][0] == {
            "label": "Base",
            "min_km": 0.0,
            "max_km": 2.0,
            "base_fee": 20,
            "per_km_fee": 0,
        }
        assert config["tiers"][1]["max_km"] is None


class TestZoneInvariants:
    def test_radius_must_be_positive(self, center):
        with pytest.raises(ValidationError):
            _zone(center, [FeeTier(min_km=0.0, base_fee=20)], radius_km=0.0)

    def test_needs_at_least_one_tier(self, center):
        with pytest.raises(ValidationError) as exc:
            _zone(center, [])
        assert "tiers" in exc.value.messages

    def test_first_tier_starts_at_zero(self, center):
        with pytest.raises(ValidationError):
            _zone(center, [FeeTier(min_km=1.0, base_fee=20)])

    def test_tier_must_end_after_it_starts(self, center):
        with pytest.raises(ValidationError):
            _zone(
                center,
                [
                    FeeTier(min_km=0.0, max_km=0.0, base_fee=20),
                    FeeTier(min_km=0.0, base_fee=20),
                ],
            )

    def test_gaps_between_tiers_are_rejected(self, center):
        with pytest.raises(ValidationError) as exc:
            _zone(
                center,
                [
                    FeeTier(min_km=0.0, max_km=2.0, base_fee=20),
                    FeeTier(min_km=3.0, base_fee=30),
                ],
            )
        assert "contiguous" in exc.value.messages["tiers"][0]

    def test_only_last_tier_may_be_open_ended(self, center):
        with pytest.raises(ValidationError):
            _zone(
                center,
                [
                    FeeTier(min_km=0.0, base_fee=20),
                    FeeTier(min_km=0.0, max_km=5.0, base_fee=20),
                ],
            )

    def test_last_tier_must_reach_boundary(self, center):
        with pytest.raises(ValidationError):
            _zone(center, [FeeTier(min_km=0.0, max_km=5.0, base_fee=20)], radius_km=10.0)

    def test_fees_may_not_drop_with_distance(self, center):
        with pytest.raises(ValidationError) as exc:
            _zone(
                center,
                [
                    FeeTier(min_km=0.0, max_km=2.0, base_fee=40),
                    FeeTier(min_km=2.0, base_fee=20),
                ],
            )
        assert "decrease" in exc.value.messages["tiers"][0]

    def test_closed_last_tier_at_boundary_is_valid(self, center):
        zone = _zone(
            center,
            [
                FeeTier(min_km=0.0, max_km=3.0, base_fee=20),
                FeeTier(min_km=3.0, max_km=10.0, base_fee=40),
            ],
        )
        assert len(zone.tiers) == 2


class TestTierLookup:
    def test_distance_inside_first_band(self, zone):
        assert zone.tier_for(1.5).label == "Base"

    def test_band_edge_belongs_to_upper_band(self, zone):
        assert zone.tier_for(2.0).label == "Per km"

    def test_boundary_distance_is_served(self, zone):
        assert zone.tier_for(10.0).label == "Per km"

    def test_beyond_boundary_has_no_tier(self, zone):
        assert zone.tier_for(10.01) is None

    def test_closed_last_tier_serves_its_upper_edge(self, center):
        zone = _zone(
            center,
            [
                FeeTier(min_km=0.0, max_km=3.0, base_fee=20),
                FeeTier(min_km=3.0, max_km=10.0, base_fee=40),
            ],
        )
        assert zone.tier_for(10.0).base_fee == 40


class TestReconfigure:
    def test_reconfigure_replaces_tiers_and_boundary(self, zone, center):
        zone.reconfigure(
            center=center,
            radius_km=5.0,
            tiers=[FeeTier(min_km=0.0, base_fee=35)],
            name="Sion",
        )
        assert zone.radius_km == 5.0
        assert zone.name == "Sion"
        assert [t.base_fee for t in zone.tiers] == [35]

    def test_reconfigure_rejects_invalid_tiers(self, zone, center):
        with pytest.raises(ValidationError):
            zone.reconfigure(
                center=center,
                radius_km=5.0,
                tiers=[FeeTier(min_km=1.0, base_fee=35)],
            )


class TestConfigHelpers:
    def test_tiers_from_config(self):
        tiers = tiers_from_config(
            [
                {"label": "Base", "min_km": 0, "max_km": 2, "base_fee": 20},
                {"label": "Per km", "min_km": 2, "base_fee": 20, "per_km_fee": 10},
            ]
        )
        assert [t.label for t in tiers] == ["Base", "Per km"]
        assert tiers[1].max_km is None
        assert tiers[1].per_km_fee == 10

    def test_default_zone_follows_settings(self):
        zone = default_zone()
        assert zone.center.latitude == 19.0728
        assert zone.center.longitude == 72.8826
        assert zone.radius_km == 10.0
        assert [t.base_fee for t in zone.ordered_tiers()] == [20, 20]
        assert zone.ordered_tiers()[1].per_km_fee == 10

    def test_default_zone_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DELIVERY_RADIUS_KM", "6")
        monkeypatch.setenv("BASE_DELIVERY_FEE", "25")
        from storefront.config import reset_settings

        reset_settings()
        zone = default_zone()

        assert zone.radius_km == 6.0
        assert zone.ordered_tiers()[0].base_fee == 25
