from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class CheckoutError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class ValidationError(CheckoutError):
    pass


@dataclass(frozen=True)
class OutOfStock(CheckoutError):
    product: str
    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"out_of_stock: product={self.product} "
            f"requested={self.requested} available={self.available} ({self.message})"
        )


@dataclass(frozen=True)
class Expired(CheckoutError):
    product: str

    def __str__(self) -> str:
        return f"expired: product={self.product} ({self.message})"


@dataclass(frozen=True)
class EmptyCart(CheckoutError):
    cart_id: str

    def __str__(self) -> str:
        return f"empty_cart: {self.cart_id} ({self.message})"


@dataclass(frozen=True)
class InsufficientFunds(CheckoutError):
    required: Decimal
    available: Decimal

    def __str__(self) -> str:
        return (
            f"insufficient_funds: required={self.required} "
            f"available={self.available} ({self.message})"
        )


@dataclass(frozen=True)
class CartConsumed(CheckoutError):
    cart_id: str

    def __str__(self) -> str:
        return f"cart_consumed: {self.cart_id} ({self.message})"


@dataclass(frozen=True)
class NotFound(CheckoutError):
    pass


@dataclass(frozen=True)
class CartNotFound(NotFound):
    cart_id: str

    def __str__(self) -> str:
        return f"cart_not_found: {self.cart_id} ({self.message})"


@dataclass(frozen=True)
class CustomerNotFound(NotFound):
    customer_id: str

    def __str__(self) -> str:
        return f"customer_not_found: {self.customer_id} ({self.message})"


@dataclass(frozen=True)
class ProductNotFound(NotFound):
    product: str

    def __str__(self) -> str:
        return f"product_not_found: {self.product} ({self.message})"
