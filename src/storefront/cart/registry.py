"""CartRegistry — the set of per-category carts held by one shopping session.

The registry is an explicit service object built around an injected
CartStore, so independent registries can coexist. Invariants kept on every
mutation:

- each category maps to at most one CategoryCart, bound to one vendor;
- a category is present exactly when its cart holds at least one line;
- no line has a quantity below 1.

Mutations never raise for expected conditions. A vendor conflict or a
missing category comes back as ``False``; a malformed quantity is a logged
no-op. After each mutation the snapshot is written to the store.
"""

from dataclasses import dataclass

from protean.exceptions import ValidationError

from storefront.cart.cart import CategoryCart
from storefront.cart.store import CartStore, empty_snapshot
from storefront.config import get_settings
from storefront.domain import logger
from storefront.errors import ErrorKind


@dataclass(frozen=True)
class AddEligibility:
    can_add: bool
    conflict_vendor_name: str | None = None

    @property
    def error(self) -> ErrorKind | None:
        return None if self.can_add else ErrorKind.VENDOR_CONFLICT


@dataclass(frozen=True)
class ValidatedCart:
    """A category cart together with its minimum-order check."""

    cart: CategoryCart
    subtotal: int
    min_order_amount: int
    meets_minimum: bool


class CartRegistry:
    def __init__(self, store: CartStore, min_order_amounts: dict | None = None, default_min_order_amount=None):
        self.store = store
        self.default_min_order_amount = (
            default_min_order_amount
            if default_min_order_amount is not None
            else get_settings().default_min_order_amount
        )
        self._carts: dict[str, CategoryCart] = {}
        self._min_order_amounts: dict[str, int] = {}

        self._restore(store.load())
        if min_order_amounts:
            self._min_order_amounts.update({str(k): v for k, v in min_order_amounts.items()})

    # -------------------------------------------------------------------
    # Eligibility
    # -------------------------------------------------------------------
    def can_add_item(self, vendor_id, category_id) -> AddEligibility:
        cart = self._carts.get(str(category_id))
        if cart is None or str(cart.vendor_id) == str(vendor_id):
            return AddEligibility(can_add=True)
        return AddEligibility(can_add=False, conflict_vendor_name=cart.vendor_name)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_to_cart(self, item, category_name) -> bool:
        """Add one unit of ``item`` to its category's cart.

        Returns False without touching state when the item carries no
        category, or when the category's cart belongs to another vendor.
        """
        if item is None or not item.category_id:
            logger.warning("cart.add_rejected", reason="missing_category")
            return False

        category_id = str(item.category_id)
        eligibility = self.can_add_item(item.vendor_id, category_id)
        if not eligibility.can_add:
            logger.info(
                "cart.vendor_conflict",
                category_id=category_id,
                vendor_id=str(item.vendor_id),
                conflict_vendor_name=eligibility.conflict_vendor_name,
            )
            return False

        cart = self._carts.get(category_id)
        try:
            if cart is None:
                cart = CategoryCart.open(item, category_name)
                cart.add_one(item)
                self._carts[category_id] = cart
            else:
                cart.add_one(item)
        except ValidationError as exc:
            logger.warning("cart.add_rejected", category_id=category_id, errors=exc.messages)
            return False

        logger.debug("cart.item_added", category_id=category_id, product_id=str(item.product_id))
        self._persist()
        return True

    def remove_from_cart(self, category_id, product_id) -> None:
        cart = self._carts.get(str(category_id))
        if cart is None or cart.drop(product_id) is None:
            return

        if not cart.items:
            del self._carts[str(category_id)]
        self._persist()

    def update_quantity(self, category_id, product_id, quantity) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            logger.warning(
                "cart.invalid_quantity",
                error=ErrorKind.INVALID_QUANTITY.value,
                category_id=str(category_id),
                product_id=str(product_id),
                quantity=repr(quantity),
            )
            return

        if quantity <= 0:
            self.remove_from_cart(category_id, product_id)
            return

        cart = self._carts.get(str(category_id))
        if cart is None or cart.set_quantity(product_id, quantity) is None:
            return
        self._persist()

    def clear_cart(self, category_id) -> None:
        if self._carts.pop(str(category_id), None) is not None:
            self._persist()

    def clear_all_carts(self) -> None:
        self._carts.clear()
        self._persist()

    def set_min_order_amounts(self, amounts: dict) -> None:
        """Replace the per-category minimum order amounts."""
        self._min_order_amounts = {str(k): v for k, v in amounts.items()}
        self._persist()

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def get_cart(self, category_id) -> CategoryCart | None:
        return self._carts.get(str(category_id))

    def get_all_carts(self) -> list[CategoryCart]:
        return list(self._carts.values())

    def get_total_items(self, category_id=None) -> int:
        if category_id is not None:
            cart = self._carts.get(str(category_id))
            return cart.total_items if cart else 0
        return sum(cart.total_items for cart in self._carts.values())

    def get_total_price(self, category_id) -> int:
        cart = self._carts.get(str(category_id))
        return cart.subtotal if cart else 0

    def min_order_amount(self, category_id) -> int:
        return self._min_order_amounts.get(str(category_id), self.default_min_order_amount)

    def get_cart_with_validation(self, category_id) -> ValidatedCart | None:
        cart = self._carts.get(str(category_id))
        if cart is None:
            return None
        return self._validate(cart)

    def get_all_carts_with_validation(self) -> list[ValidatedCart]:
        return [self._validate(cart) for cart in self._carts.values()]

    def snapshot(self) -> dict:
        return {
            "carts": [cart.to_snapshot() for cart in self._carts.values()],
            "cart_min_settings": dict(self._min_order_amounts),
        }

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _validate(self, cart) -> ValidatedCart:
        subtotal = cart.subtotal
        minimum = self.min_order_amount(cart.category_id)
        return ValidatedCart(
            cart=cart,
            subtotal=subtotal,
            min_order_amount=minimum,
            meets_minimum=subtotal >= minimum,
        )

    def _restore(self, snapshot) -> None:
        snapshot = snapshot or empty_snapshot()
        for data in snapshot.get("carts", []):
            cart = CategoryCart.from_snapshot(data)
            # Empty carts are never kept
            if cart.items:
                self._carts[str(cart.category_id)] = cart
        self._min_order_amounts = {str(k): v for k, v in snapshot.get("cart_min_settings", {}).items()}

    def _persist(self) -> None:
        self.store.save(self.snapshot())
