from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable

from retail_checkout.adapters.outbound.in_memory_carts import InMemoryCartRepository
from retail_checkout.adapters.outbound.in_memory_customers import (
    InMemoryCustomerRepository,
)
from retail_checkout.adapters.outbound.in_memory_inventory import InMemoryInventory
from retail_checkout.config import Settings
from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.product import expirable, non_expirable
from retail_checkout.core.domain.service.cart_service import (
    AddToCartService,
    CartDeps,
    GetCartService,
    OpenCartService,
)
from retail_checkout.core.domain.service.catalog_service import (
    ListProductsDeps,
    ListProductsService,
)
from retail_checkout.core.domain.service.checkout_service import (
    CheckoutDeps,
    CheckoutService,
)

DEMO_CUSTOMER_ID = "c-1"


@dataclass(frozen=True)
class UseCases:
    open_cart: OpenCartService
    add_to_cart: AddToCartService
    get_cart: GetCartService
    checkout: CheckoutService
    list_products: ListProductsService


def reference_inventory(today: date) -> InMemoryInventory:
    return (
        InMemoryInventory()
        .stock(expirable("Cheese", 100, today + timedelta(days=7), "0.2"), 10)
        .stock(expirable("Biscuits", 150, today + timedelta(days=30), "0.7"), 5)
        .stock(non_expirable("TV", 500, requires_shipping=True, weight="15.0"), 3)
        .stock(non_expirable("Mobile Scratch Card", 50), 20)
    )


def reference_customers(balance: Decimal) -> InMemoryCustomerRepository:
    customers = InMemoryCustomerRepository()
    customers.save(
        Customer(CustomerId(DEMO_CUSTOMER_ID), "John Doe", Money.of(balance))
    )
    return customers


def build_usecases(
    inventory: InMemoryInventory | None = None,
    customers: InMemoryCustomerRepository | None = None,
    clock: Callable[[], date] = date.today,
    settings: Settings | None = None,
) -> UseCases:
    settings = settings or Settings()
    inventory = inventory if inventory is not None else reference_inventory(clock())
    customers = (
        customers if customers is not None else reference_customers(settings.seed_balance)
    )
    carts = InMemoryCartRepository()
    lock = threading.Lock()

    cart_deps = CartDeps(
        carts=carts, customers=customers, inventory=inventory, clock=clock, lock=lock
    )
    checkout = CheckoutService(
        CheckoutDeps(
            inventory=inventory,
            customers=customers,
            carts=carts,
            clock=clock,
            lock=lock,
        )
    )

    return UseCases(
        open_cart=OpenCartService(cart_deps),
        add_to_cart=AddToCartService(cart_deps),
        get_cart=GetCartService(cart_deps),
        checkout=checkout,
        list_products=ListProductsService(
            ListProductsDeps(inventory=inventory, clock=clock)
        ),
    )
