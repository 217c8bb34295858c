from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Sequence

from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.ports.inbound.list_products import (
    ListProductsUseCase,
    ProductView,
)
from retail_checkout.core.ports.outbound.inventory import InventoryGateway


@dataclass(frozen=True)
class ListProductsDeps:
    inventory: InventoryGateway
    clock: Callable[[], date] = date.today


@dataclass(frozen=True)
class ListProductsService(ListProductsUseCase):
    deps: ListProductsDeps

    def list_products(self) -> Result[Sequence[ProductView], CheckoutError]:
        found = self.deps.inventory.products()
        if isinstance(found, Failure):
            return found

        today = self.deps.clock()
        views = []
        for p in found.unwrap():
            stock = self.deps.inventory.stock_of(p.name)
            if isinstance(stock, Failure):
                return stock
            views.append(
                ProductView(
                    name=p.name,
                    price=p.price,
                    stock=stock.unwrap(),
                    weight=p.weight,
                    needs_shipping=p.needs_shipping(),
                    expires_on=p.expires_on,
                    expired=p.is_expired(today),
                )
            )
        return Success(tuple(views))
