from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol, Sequence

from returns.result import Result

from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.money import Money


@dataclass(frozen=True)
class ProductView:
    name: str
    price: Money
    stock: int
    weight: Decimal
    needs_shipping: bool
    expires_on: date | None
    expired: bool


class ListProductsUseCase(Protocol):
    def list_products(self) -> Result[Sequence[ProductView], CheckoutError]: ...
