"""Shared BDD fixtures and step definitions for the Storefront domain."""

import pytest
from pytest_bdd import given, parsers, then

from storefront.cart.registry import CartRegistry
from storefront.cart.store import InMemoryCartStore


@pytest.fixture()
def context():
    """Mutable scratchpad shared between the steps of one scenario."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart registry", target_fixture="registry")
def empty_registry():
    return CartRegistry(InMemoryCartStore())


@given(
    parsers.cfparse(
        'item "{product_id}" priced {price:d} from vendor "{vendor_id}" in category "{category_id}" is in the cart'
    )
)
def item_in_cart(registry, make_item, product_id, price, vendor_id, category_id):
    item = make_item(product_id, price=price, vendor_id=vendor_id, category_id=category_id)
    assert registry.add_to_cart(item, "Breakfast") is True


@given("the Kurla West delivery zone")
def kurla_zone(zone):
    assert zone.radius_km == 10.0


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('category "{category_id}" is no longer in the registry'))
def category_absent(registry, category_id):
    assert registry.get_cart(category_id) is None
    assert all(str(cart.category_id) != category_id for cart in registry.get_all_carts())


@then(parsers.re(r'category "(?P<category_id>[^"]+)" has (?P<count>\d+) line items?'))
def category_has_lines(registry, category_id, count):
    assert len(registry.get_cart(category_id).items) == int(count)
