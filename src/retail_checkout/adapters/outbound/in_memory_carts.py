from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.cart import Cart, CartId
from retail_checkout.core.domain.model.errors import CartNotFound, CheckoutError
from retail_checkout.core.ports.outbound.carts import CartRepository


@dataclass
class InMemoryCartRepository(CartRepository):
    _store: Dict[str, Cart] = field(default_factory=dict)

    def save(self, cart: Cart) -> Result[CartId, CheckoutError]:
        self._store[str(cart.cart_id.value)] = cart
        return Success(cart.cart_id)

    def get(self, cart_id: CartId) -> Result[Cart, CheckoutError]:
        key = str(cart_id.value)
        if key not in self._store:
            return Failure(CartNotFound(message="cart not found", cart_id=key))
        return Success(self._store[key])
