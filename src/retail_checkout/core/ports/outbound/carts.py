from __future__ import annotations

from typing import Protocol

from returns.result import Result

from retail_checkout.core.domain.model.cart import Cart, CartId
from retail_checkout.core.domain.model.errors import CheckoutError


class CartRepository(Protocol):
    def save(self, cart: Cart) -> Result[CartId, CheckoutError]: ...

    def get(self, cart_id: CartId) -> Result[Cart, CheckoutError]: ...
