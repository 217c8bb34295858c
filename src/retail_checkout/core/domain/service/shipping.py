from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Sequence, Tuple

from retail_checkout.core.domain.model.cart import CartEntry
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.shipment import (
    ShipmentLine,
    ShipmentNotice,
    ShippableItem,
)

RATE_PER_KG = Decimal("10.0")
GRAMS_PER_KG = 1000


def shippable_items(entries: Iterable[CartEntry]) -> Tuple[ShippableItem, ...]:
    return tuple(
        ShippableItem(
            name=e.product.name, unit_weight=e.product.weight, quantity=e.quantity
        )
        for e in entries
        if e.product.needs_shipping()
    )


def total_weight(items: Sequence[ShippableItem]) -> Decimal:
    return sum((it.weight() for it in items), Decimal("0"))


def shipping_fee(
    items: Sequence[ShippableItem], rate_per_kg: Decimal = RATE_PER_KG
) -> Money:
    if not items:
        return Money.zero()
    return Money(total_weight(items) * rate_per_kg)


def shipment_notice(items: Sequence[ShippableItem]) -> ShipmentNotice:
    lines = tuple(
        ShipmentLine(
            name=it.name,
            quantity=it.quantity,
            grams=int(it.weight() * GRAMS_PER_KG),
        )
        for it in items
    )
    return ShipmentNotice(lines=lines, total_weight_kg=total_weight(items))
