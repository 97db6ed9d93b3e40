"""CategoryCart aggregate — one vendor's items within one product category.

A customer holds one CategoryCart per category. Every line in a cart comes
from the cart's vendor; a line's quantity is always at least 1 (lines that
would drop to zero are removed by the registry instead).
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import HasMany, Identifier, Integer, String

from storefront.domain import storefront


@storefront.value_object
class MenuItem:
    """A purchasable listing as offered on the menu.

    Vendor and category are required: a listing that is not bound to both
    cannot be constructed, so it can never reach a cart.
    """

    product_id = String(required=True, max_length=255)
    name = String(required=True, max_length=255)
    price = Integer(required=True, min_value=0)
    image = String(max_length=1024)
    vendor_id = String(required=True, max_length=255)
    vendor_name = String(max_length=255)
    category_id = String(required=True, max_length=255)


@storefront.entity(part_of="CategoryCart")
class CartLineItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)
    vendor_id = Identifier(required=True)
    vendor_name = String(max_length=255)
    category_id = Identifier(required=True)

    @property
    def line_total(self):
        return self.price * self.quantity

    def to_snapshot(self):
        return {
            "product_id": str(self.product_id),
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image,
            "vendor_id": str(self.vendor_id),
            "vendor_name": self.vendor_name,
            "category_id": str(self.category_id),
        }


@storefront.aggregate
class CategoryCart:
    category_id = Identifier(required=True)
    category_name = String(max_length=255)
    vendor_id = Identifier(required=True)
    vendor_name = String(max_length=255)
    items = HasMany(CartLineItem)

    @invariant.post
    def items_must_come_from_cart_vendor(self):
        for item in self.items or []:
            if str(item.vendor_id) != str(self.vendor_id):
                raise ValidationError({"items": [f"Item {item.product_id} does not belong to vendor {self.vendor_id}"]})

    @invariant.post
    def product_ids_must_be_unique(self):
        product_ids = [str(item.product_id) for item in self.items or []]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product may appear only once per cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open(cls, menu_item, category_name):
        """Start a cart for ``menu_item``'s category, bound to its vendor."""
        return cls(
            category_id=menu_item.category_id,
            category_name=category_name,
            vendor_id=menu_item.vendor_id,
            vendor_name=menu_item.vendor_name,
        )

    @classmethod
    def from_snapshot(cls, data):
        cart = cls(
            category_id=data["category_id"],
            category_name=data.get("category_name"),
            vendor_id=data["vendor_id"],
            vendor_name=data.get("vendor_name"),
        )
        for row in data.get("items", []):
            cart.add_items(CartLineItem(**row))
        return cart

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_one(self, menu_item):
        """Add one unit of ``menu_item``: a new line at 1, or +1 on an existing line."""
        existing = self.line_for(menu_item.product_id)
        if existing:
            existing.quantity += 1
            return existing

        line = CartLineItem(
            product_id=menu_item.product_id,
            name=menu_item.name,
            price=menu_item.price,
            quantity=1,
            image=menu_item.image,
            vendor_id=menu_item.vendor_id,
            vendor_name=menu_item.vendor_name,
            category_id=menu_item.category_id,
        )
        self.add_items(line)
        return line

    def set_quantity(self, product_id, quantity):
        line = self.line_for(product_id)
        if line is not None:
            line.quantity = quantity
        return line

    def drop(self, product_id):
        line = self.line_for(product_id)
        if line is not None:
            self.remove_items(line)
        return line

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self):
        return sum(item.line_total for item in self.items)

    def to_snapshot(self):
        return {
            "category_id": str(self.category_id),
            "category_name": self.category_name,
            "vendor_id": str(self.vendor_id),
            "vendor_name": self.vendor_name,
            "items": [item.to_snapshot() for item in self.items],
        }
