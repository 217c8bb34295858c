from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable


@dataclass(frozen=True, order=True)
class Money:
    """Single-unit amount. Arithmetic keeps full decimal precision."""

    amount: Decimal

    @staticmethod
    def of(amount: Decimal | int | str) -> "Money":
        return Money(Decimal(str(amount)))

    @staticmethod
    def zero() -> "Money":
        return Money(Decimal("0"))

    def __add__(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def __sub__(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def __mul__(self, n: int | Decimal) -> "Money":
        return Money(self.amount * Decimal(n))

    def is_negative(self) -> bool:
        return self.amount < 0

    def truncated(self) -> int:
        # display only: drop the fraction, never round
        return int(self.amount)


def fold_money(values: Iterable[Money]) -> Money:
    total = Money.zero()
    for v in values:
        total = total + v
    return total
