"""CustomerDetails value object — who receives a checkout and where."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront


@storefront.value_object
class CustomerDetails:
    """Identity fields sent along with an order request.

    Phone numbers accept digits, spaces, hyphens, parentheses and a leading +,
    and must carry at least 10 digits.
    """

    name = String(required=True, max_length=100)
    phone = String(required=True, max_length=20)
    address = String(required=True, max_length=500)
    email = String(max_length=254)

    @invariant.post
    def name_must_be_meaningful(self):
        if self.name is not None and len(self.name.strip()) < 2:
            raise ValidationError({"name": ["Name must be at least 2 characters"]})

    @invariant.post
    def phone_must_be_dialable(self):
        if self.phone is None:
            return
        if not re.match(r"^\+?[\d\s\-()]+$", self.phone):
            raise ValidationError({"phone": [f"Invalid phone number: {self.phone!r}"]})
        if len(re.sub(r"\D", "", self.phone)) < 10:
            raise ValidationError({"phone": ["Please enter a valid phone number"]})

    @invariant.post
    def email_must_look_like_an_address(self):
        if not self.email:
            return
        local_part, _, domain_part = self.email.partition("@")
        if not local_part or "." not in domain_part or " " in self.email or domain_part.count("@"):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})
