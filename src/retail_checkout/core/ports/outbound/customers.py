from __future__ import annotations

from typing import Protocol

from returns.result import Result

from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.money import Money


class CustomerRepository(Protocol):
    def get(self, customer_id: CustomerId) -> Result[Customer, CheckoutError]: ...

    def save(self, customer: Customer) -> Result[CustomerId, CheckoutError]: ...

    def debit(
        self, customer_id: CustomerId, amount: Money
    ) -> Result[Customer, CheckoutError]:
        """Take ``amount`` from the balance; fails without change if it would go negative."""
        ...
