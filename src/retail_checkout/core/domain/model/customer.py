from __future__ import annotations

from dataclasses import dataclass, replace

from retail_checkout.core.domain.model.money import Money


@dataclass(frozen=True)
class CustomerId:
    value: str


@dataclass(frozen=True)
class Customer:
    customer_id: CustomerId
    name: str
    balance: Money

    def can_afford(self, amount: Money) -> bool:
        return self.balance >= amount

    def debited(self, amount: Money) -> "Customer":
        return replace(self, balance=self.balance - amount)
