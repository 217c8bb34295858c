from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.product import Product


@dataclass(frozen=True)
class Reservation:
    product: str
    quantity: int


class InventoryGateway(Protocol):
    def product(self, name: str) -> Result[Product, CheckoutError]: ...

    def products(self) -> Result[Sequence[Product], CheckoutError]: ...

    def stock_of(self, name: str) -> Result[int, CheckoutError]: ...

    def set_stock(self, name: str, stock: int) -> Result[None, CheckoutError]: ...

    def reserve(
        self, reservations: Sequence[Reservation]
    ) -> Result[None, CheckoutError]:
        """Decrement stock for every reservation, or for none of them."""
        ...

    def release(
        self, reservations: Sequence[Reservation]
    ) -> Result[None, CheckoutError]:
        """Put back stock taken by a previous ``reserve``."""
        ...
