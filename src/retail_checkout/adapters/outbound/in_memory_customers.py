from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.errors import (
    CheckoutError,
    CustomerNotFound,
    InsufficientFunds,
    ValidationError,
)
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.ports.outbound.customers import CustomerRepository


@dataclass
class InMemoryCustomerRepository(CustomerRepository):
    _store: Dict[str, Customer] = field(default_factory=dict)

    def get(self, customer_id: CustomerId) -> Result[Customer, CheckoutError]:
        key = customer_id.value
        if key not in self._store:
            return Failure(
                CustomerNotFound(message="customer not found", customer_id=key)
            )
        return Success(self._store[key])

    def save(self, customer: Customer) -> Result[CustomerId, CheckoutError]:
        if customer.balance.is_negative():
            return Failure(ValidationError("balance must be >= 0"))
        self._store[customer.customer_id.value] = customer
        return Success(customer.customer_id)

    def debit(
        self, customer_id: CustomerId, amount: Money
    ) -> Result[Customer, CheckoutError]:
        def apply(customer: Customer) -> Result[Customer, CheckoutError]:
            if not customer.can_afford(amount):
                return Failure(
                    InsufficientFunds(
                        message="insufficient balance in customer account",
                        required=amount.amount,
                        available=customer.balance.amount,
                    )
                )
            updated = customer.debited(amount)
            self._store[customer_id.value] = updated
            return Success(updated)

        return self.get(customer_id).bind(apply)
