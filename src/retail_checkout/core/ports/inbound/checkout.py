from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from returns.result import Result

from retail_checkout.core.domain.model.cart import Cart
from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.receipt import Receipt


@dataclass(frozen=True)
class CheckoutCommand:
    customer_id: str
    cart_id: str  # UUID string


class CheckoutUseCase(Protocol):
    def checkout(self, command: CheckoutCommand) -> Result[Receipt, CheckoutError]: ...

    def checkout_cart(
        self, customer_id: CustomerId, cart: Cart
    ) -> Result[Receipt, CheckoutError]: ...
