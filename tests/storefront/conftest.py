import math

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture
from shared.geo import EARTH_RADIUS_KM

from storefront.cart.cart import MenuItem
from storefront.cart.registry import CartRegistry
from storefront.cart.store import InMemoryCartStore
from storefront.delivery.evaluator import DeliveryZoneEvaluator
from storefront.delivery.zone import DeliveryZone, FeeTier, GeoPoint

KURLA_CENTER = (19.0728, 72.8826)


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def center():
    return GeoPoint(latitude=KURLA_CENTER[0], longitude=KURLA_CENTER[1])


@pytest.fixture()
def zone(center):
    """Base band 0-2 km at 20, then 20 + 10 per started km, out to 10 km."""
    return DeliveryZone.define(
        center=center,
        radius_km=10.0,
        name="Kurla West, Mumbai",
        tiers=[
            FeeTier(label="Base", min_km=0.0, max_km=2.0, base_fee=20),
            FeeTier(label="Per km", min_km=2.0, base_fee=20, per_km_fee=10),
        ],
    )


@pytest.fixture()
def evaluator(zone):
    return DeliveryZoneEvaluator(zone=zone)


@pytest.fixture()
def store():
    return InMemoryCartStore()


@pytest.fixture()
def registry(store):
    return CartRegistry(store)


@pytest.fixture()
def point_at(center):
    """Factory for a point ``km`` kilometres due north of the zone center."""

    def _point(km, origin=None):
        origin = origin or center
        return GeoPoint(
            latitude=origin.latitude + math.degrees(km / EARTH_RADIUS_KM),
            longitude=origin.longitude,
        )

    return _point


@pytest.fixture()
def make_item():
    """Factory for menu items; defaults match the p1/v1/cat1 scenarios."""

    def _make(
        product_id="p1",
        price=45,
        vendor_id="v1",
        vendor_name="Asha's Kitchen",
        category_id="cat1",
        name=None,
    ):
        return MenuItem(
            product_id=product_id,
            name=name or f"Dish {product_id}",
            price=price,
            image=f"/images/{product_id}.jpg",
            vendor_id=vendor_id,
            vendor_name=vendor_name,
            category_id=category_id,
        )

    return _make
