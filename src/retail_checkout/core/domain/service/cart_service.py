from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import date
from typing import Callable

import structlog
from returns.result import Failure, Result

from retail_checkout.core.domain.model.cart import Cart, CartId, parse_cart_id
from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.errors import CheckoutError, ValidationError
from retail_checkout.core.ports.inbound.carts import (
    AddToCartCommand,
    AddToCartUseCase,
    CartLineView,
    CartView,
    GetCartQuery,
    GetCartUseCase,
    OpenCartCommand,
    OpenCartUseCase,
)
from retail_checkout.core.ports.outbound.carts import CartRepository
from retail_checkout.core.ports.outbound.customers import CustomerRepository
from retail_checkout.core.ports.outbound.inventory import InventoryGateway

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartDeps:
    carts: CartRepository
    customers: CustomerRepository
    inventory: InventoryGateway
    clock: Callable[[], date] = date.today
    # shared with checkout so a cart is never changed while it settles
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass(frozen=True)
class OpenCartService(OpenCartUseCase):
    deps: CartDeps

    def open_cart(self, command: OpenCartCommand) -> Result[CartView, CheckoutError]:
        cid = command.customer_id.strip()
        if not cid:
            return Failure(ValidationError("customer_id is required"))

        found = self.deps.customers.get(CustomerId(cid))
        if isinstance(found, Failure):
            return found

        cart = Cart.open(CustomerId(cid))
        return self.deps.carts.save(cart).map(lambda _: to_cart_view(cart))


@dataclass(frozen=True)
class AddToCartService(AddToCartUseCase):
    deps: CartDeps

    def add_to_cart(self, command: AddToCartCommand) -> Result[CartView, CheckoutError]:
        if not command.product.strip():
            return Failure(ValidationError("product is required"))

        cart_id = parse_cart_id(command.cart_id)
        if isinstance(cart_id, Failure):
            return cart_id

        with self.deps.lock:
            return self._add(cart_id.unwrap(), command)

    def _add(
        self, cart_id: CartId, command: AddToCartCommand
    ) -> Result[CartView, CheckoutError]:
        loaded = self.deps.carts.get(cart_id)
        if isinstance(loaded, Failure):
            return loaded
        cart = loaded.unwrap()

        product = self.deps.inventory.product(command.product)
        if isinstance(product, Failure):
            return product
        stock = self.deps.inventory.stock_of(command.product)
        if isinstance(stock, Failure):
            return stock

        added = cart.add(
            product.unwrap(), command.quantity, stock.unwrap(), self.deps.clock()
        )
        if isinstance(added, Failure):
            logger.info(
                "cart.add_rejected",
                cart_id=command.cart_id,
                product=command.product,
                error=type(added.failure()).__name__,
            )
            return added

        return self.deps.carts.save(cart).map(lambda _: to_cart_view(cart))


@dataclass(frozen=True)
class GetCartService(GetCartUseCase):
    deps: CartDeps

    def get_cart(self, query: GetCartQuery) -> Result[CartView, CheckoutError]:
        cart_id = parse_cart_id(query.cart_id)
        if isinstance(cart_id, Failure):
            return cart_id

        with self.deps.lock:
            return self.deps.carts.get(cart_id.unwrap()).map(to_cart_view)


def to_cart_view(cart: Cart) -> CartView:
    lines = tuple(
        CartLineView(
            product=e.product.name,
            unit_price=e.product.price,
            quantity=e.quantity,
            total=e.total(),
        )
        for e in cart.items()
    )
    return CartView(
        cart_id=cart.cart_id,
        customer_id=cart.customer_id,
        status=cart.status,
        subtotal=cart.subtotal(),
        lines=lines,
    )
