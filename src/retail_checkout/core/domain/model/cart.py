from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Tuple
from uuid import UUID, uuid4

from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.errors import (
    CartConsumed,
    CheckoutError,
    Expired,
    OutOfStock,
    ValidationError,
)
from retail_checkout.core.domain.model.money import Money, fold_money
from retail_checkout.core.domain.model.product import Product


@dataclass(frozen=True)
class CartId:
    value: UUID

    @staticmethod
    def new() -> "CartId":
        return CartId(uuid4())


def parse_cart_id(raw: str) -> Result[CartId, CheckoutError]:
    try:
        return Success(CartId(UUID(raw)))
    except ValueError:
        return Failure(ValidationError(message="cart_id must be a valid UUID"))


class CartStatus(str, Enum):
    OPEN = "OPEN"
    CONSUMED = "CONSUMED"  # settled by a checkout; read-only from then on


@dataclass(frozen=True)
class CartEntry:
    product: Product
    quantity: int

    def total(self) -> Money:
        return self.product.price * self.quantity


@dataclass
class Cart:
    cart_id: CartId
    customer_id: CustomerId
    status: CartStatus = CartStatus.OPEN
    _entries: Dict[str, CartEntry] = field(default_factory=dict)

    @staticmethod
    def open(customer_id: CustomerId) -> "Cart":
        return Cart(cart_id=CartId.new(), customer_id=customer_id)

    def add(
        self, product: Product, quantity: int, in_stock: int, today: date
    ) -> Result[CartEntry, CheckoutError]:
        """Add ``quantity`` of ``product``, merging with an existing entry.

        ``in_stock`` is the product's current stock. The merged quantity is
        checked against it before the entry is replaced; on any failure the
        cart is left exactly as it was.
        """
        if self.status is CartStatus.CONSUMED:
            return Failure(
                CartConsumed(
                    message="cart was already checked out",
                    cart_id=str(self.cart_id.value),
                )
            )
        if quantity <= 0:
            return Failure(ValidationError(f"quantity must be > 0: {product.name}"))
        if in_stock < quantity:
            return Failure(
                OutOfStock(
                    message=f"not enough stock for {product.name}",
                    product=product.name,
                    requested=quantity,
                    available=in_stock,
                )
            )
        if product.is_expired(today):
            return Failure(
                Expired(message=f"{product.name} has expired", product=product.name)
            )

        existing = self._entries.get(product.name)
        merged = quantity if existing is None else existing.quantity + quantity
        if in_stock < merged:
            return Failure(
                OutOfStock(
                    message=f"not enough stock for {product.name}",
                    product=product.name,
                    requested=merged,
                    available=in_stock,
                )
            )

        entry = CartEntry(product=product, quantity=merged)
        self._entries[product.name] = entry
        return Success(entry)

    def items(self) -> Tuple[CartEntry, ...]:
        return tuple(self._entries.values())

    def quantity_of(self, name: str) -> int:
        entry = self._entries.get(name)
        return 0 if entry is None else entry.quantity

    def is_empty(self) -> bool:
        return not self._entries

    def is_consumed(self) -> bool:
        return self.status is CartStatus.CONSUMED

    def subtotal(self) -> Money:
        return fold_money(e.total() for e in self._entries.values())

    def consume(self) -> None:
        self.status = CartStatus.CONSUMED

    def reopen(self) -> None:
        self.status = CartStatus.OPEN
