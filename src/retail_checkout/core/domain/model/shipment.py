from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class ShippableItem:
    name: str
    unit_weight: Decimal  # kg
    quantity: int

    def weight(self) -> Decimal:
        return self.unit_weight * self.quantity


@dataclass(frozen=True)
class ShipmentLine:
    name: str
    quantity: int
    grams: int


@dataclass(frozen=True)
class ShipmentNotice:
    lines: Tuple[ShipmentLine, ...]
    total_weight_kg: Decimal

    def is_empty(self) -> bool:
        return not self.lines
