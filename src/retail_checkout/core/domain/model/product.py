from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Union

from retail_checkout.core.domain.model.money import Money


@dataclass(frozen=True)
class Expirable:
    expires_on: date


@dataclass(frozen=True)
class NonExpirable:
    requires_shipping: bool = False


ProductKind = Union[Expirable, NonExpirable]


@dataclass(frozen=True)
class Product:
    """Catalogue identity of a sellable item.

    Stock is not part of the product: it is owned by the inventory and looked
    up by ``name``.
    """

    name: str
    price: Money
    weight: Decimal = Decimal("0")  # kg per unit
    kind: ProductKind = field(default_factory=NonExpirable)

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("product name is required")
        if self.price.is_negative():
            raise ValueError(f"price must be >= 0: {self.name}")
        if self.weight < 0:
            raise ValueError(f"weight must be >= 0: {self.name}")

    def is_expired(self, today: date) -> bool:
        if isinstance(self.kind, Expirable):
            return today > self.kind.expires_on
        return False

    def needs_shipping(self) -> bool:
        if isinstance(self.kind, Expirable):
            return True
        return self.kind.requires_shipping

    @property
    def expires_on(self) -> date | None:
        if isinstance(self.kind, Expirable):
            return self.kind.expires_on
        return None


def expirable(
    name: str,
    price: Decimal | int | str,
    expires_on: date,
    weight: Decimal | int | str = "0",
) -> Product:
    return Product(
        name=name,
        price=Money.of(price),
        weight=Decimal(str(weight)),
        kind=Expirable(expires_on),
    )


def non_expirable(
    name: str,
    price: Decimal | int | str,
    requires_shipping: bool = False,
    weight: Decimal | int | str = "0",
) -> Product:
    return Product(
        name=name,
        price=Money.of(price),
        weight=Decimal(str(weight)),
        kind=NonExpirable(requires_shipping),
    )
