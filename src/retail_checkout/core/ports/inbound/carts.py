from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from retail_checkout.core.domain.model.cart import CartId, CartStatus
from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.money import Money


@dataclass(frozen=True)
class OpenCartCommand:
    customer_id: str


@dataclass(frozen=True)
class AddToCartCommand:
    cart_id: str  # UUID string
    product: str
    quantity: int


@dataclass(frozen=True)
class GetCartQuery:
    cart_id: str  # UUID string


@dataclass(frozen=True)
class CartLineView:
    product: str
    unit_price: Money
    quantity: int
    total: Money


@dataclass(frozen=True)
class CartView:
    cart_id: CartId
    customer_id: CustomerId
    status: CartStatus
    subtotal: Money
    lines: Sequence[CartLineView]


class OpenCartUseCase(Protocol):
    def open_cart(self, command: OpenCartCommand) -> Result[CartView, CheckoutError]: ...


class AddToCartUseCase(Protocol):
    def add_to_cart(
        self, command: AddToCartCommand
    ) -> Result[CartView, CheckoutError]: ...


class GetCartUseCase(Protocol):
    def get_cart(self, query: GetCartQuery) -> Result[CartView, CheckoutError]: ...
