from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.errors import (
    CheckoutError,
    OutOfStock,
    ProductNotFound,
    ValidationError,
)
from retail_checkout.core.domain.model.product import Product
from retail_checkout.core.ports.outbound.inventory import InventoryGateway, Reservation


@dataclass
class InMemoryInventory(InventoryGateway):
    _products: Dict[str, Product] = field(default_factory=dict)
    _stock_by_name: Dict[str, int] = field(default_factory=dict)

    def stock(self, product: Product, quantity: int) -> "InMemoryInventory":
        if quantity < 0:
            raise ValueError(f"stock must be >= 0: {product.name}")
        self._products[product.name] = product
        self._stock_by_name[product.name] = quantity
        return self

    def product(self, name: str) -> Result[Product, CheckoutError]:
        if name not in self._products:
            return Failure(_not_found(name))
        return Success(self._products[name])

    def products(self) -> Result[Sequence[Product], CheckoutError]:
        return Success(tuple(self._products.values()))  # insertion order

    def stock_of(self, name: str) -> Result[int, CheckoutError]:
        if name not in self._stock_by_name:
            return Failure(_not_found(name))
        return Success(self._stock_by_name[name])

    def set_stock(self, name: str, stock: int) -> Result[None, CheckoutError]:
        if name not in self._stock_by_name:
            return Failure(_not_found(name))
        if stock < 0:
            return Failure(ValidationError(f"stock must be >= 0: {name}"))
        self._stock_by_name[name] = stock
        return Success(None)

    def reserve(
        self, reservations: Sequence[Reservation]
    ) -> Result[None, CheckoutError]:
        # validate first (no partial reservation)
        wanted: Dict[str, int] = {}
        for r in reservations:
            if r.product not in self._stock_by_name:
                return Failure(_not_found(r.product))
            wanted[r.product] = wanted.get(r.product, 0) + r.quantity

        for name, quantity in wanted.items():
            available = self._stock_by_name[name]
            if available < quantity:
                return Failure(
                    OutOfStock(
                        message="insufficient stock",
                        product=name,
                        requested=quantity,
                        available=available,
                    )
                )

        # commit reservation
        for name, quantity in wanted.items():
            self._stock_by_name[name] -= quantity

        return Success(None)

    def release(
        self, reservations: Sequence[Reservation]
    ) -> Result[None, CheckoutError]:
        for r in reservations:
            if r.product not in self._stock_by_name:
                return Failure(_not_found(r.product))

        for r in reservations:
            self._stock_by_name[r.product] += r.quantity

        return Success(None)


def _not_found(name: str) -> ProductNotFound:
    return ProductNotFound(message="product not found", product=name)
