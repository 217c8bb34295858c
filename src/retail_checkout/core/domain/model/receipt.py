from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from retail_checkout.core.domain.model.cart import CartId
from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.shipment import ShipmentNotice


@dataclass(frozen=True)
class ReceiptLine:
    name: str
    quantity: int
    unit_price: Money
    total: Money

    @property
    def display_total(self) -> int:
        return self.total.truncated()


@dataclass(frozen=True)
class Receipt:
    cart_id: CartId
    customer_id: CustomerId
    lines: Tuple[ReceiptLine, ...]
    shipment: ShipmentNotice
    subtotal: Money
    shipping_fee: Money
    total: Money
    balance_after: Money
