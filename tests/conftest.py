from datetime import date, timedelta
from pathlib import Path

import pytest

from retail_checkout.adapters.outbound.in_memory_customers import (
    InMemoryCustomerRepository,
)
from retail_checkout.adapters.outbound.in_memory_inventory import InMemoryInventory
from retail_checkout.bootstrap import build_usecases
from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.product import expirable, non_expirable

TODAY = date(2026, 3, 1)


def pytest_collection_modifyitems(config, items):
    """Mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))
        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)


class Clock:
    """Settable stand-in for ``date.today``."""

    def __init__(self, today: date) -> None:
        self.today = today

    def __call__(self) -> date:
        return self.today

    def advance(self, days: int) -> None:
        self.today = self.today + timedelta(days=days)


@pytest.fixture()
def today():
    return TODAY


@pytest.fixture()
def clock():
    return Clock(TODAY)


@pytest.fixture()
def cheese():
    return expirable("Cheese", 100, TODAY + timedelta(days=7), "0.2")


@pytest.fixture()
def biscuits():
    return expirable("Biscuits", 150, TODAY + timedelta(days=30), "0.7")


@pytest.fixture()
def scratch_card():
    return non_expirable("Scratch Card", 50)


@pytest.fixture()
def tv():
    return non_expirable("TV", 500, requires_shipping=True, weight="15.0")


@pytest.fixture()
def inventory(cheese, biscuits, scratch_card, tv):
    return (
        InMemoryInventory()
        .stock(cheese, 10)
        .stock(biscuits, 5)
        .stock(scratch_card, 20)
        .stock(tv, 3)
    )


@pytest.fixture()
def customer():
    return Customer(CustomerId("c-1"), "John Doe", Money.of(1000))


@pytest.fixture()
def customers(customer):
    repo = InMemoryCustomerRepository()
    repo.save(customer)
    return repo


@pytest.fixture()
def usecases(inventory, customers, clock):
    return build_usecases(inventory=inventory, customers=customers, clock=clock)
