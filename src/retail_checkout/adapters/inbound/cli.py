from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Sequence, Tuple

from returns.pipeline import flow
from returns.pointfree import bind
from returns.result import Failure, Result, Success

from retail_checkout.adapters.outbound.in_memory_customers import (
    InMemoryCustomerRepository,
)
from retail_checkout.adapters.outbound.in_memory_inventory import InMemoryInventory
from retail_checkout.bootstrap import DEMO_CUSTOMER_ID, UseCases, build_usecases
from retail_checkout.config import Settings
from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.errors import CheckoutError
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.product import (
    Product,
    expirable,
    non_expirable,
)
from retail_checkout.core.domain.model.receipt import Receipt
from retail_checkout.core.ports.inbound.carts import (
    AddToCartCommand,
    CartView,
    OpenCartCommand,
)
from retail_checkout.core.ports.inbound.checkout import CheckoutCommand
from retail_checkout.core.ports.outbound.presenter import ReceiptPresenter

DEMO_LINES: Tuple[Tuple[str, int], ...] = (
    ("Cheese", 2),
    ("Biscuits", 1),
    ("Mobile Scratch Card", 1),
)


@dataclass(frozen=True)
class CliOrder:
    customer: Customer
    inventory: InMemoryInventory | None
    lines: Sequence[Tuple[str, int]]


def run_cli(
    raw: str,
    presenter: ReceiptPresenter,
    clock: Callable[[], date] = date.today,
    settings: Settings | None = None,
) -> int:
    """
    raw: JSON string.
    Example:
      {"customer":{"id":"c-1","name":"John Doe","balance":"1000"},
       "products":[{"name":"Cheese","price":"100","stock":10,"weight":"0.2",
                    "expires_on":"2030-01-01"}],
       "lines":[{"product":"Cheese","quantity":2}]}
    "products" may be omitted to use the reference catalogue.
    """
    try:
        payload = json.loads(raw)
        order = _parse_order(payload)
    except Exception as e:  # noqa: BLE001
        print(f"invalid_input: {e}")
        return 2

    customers = InMemoryCustomerRepository()
    customers.save(order.customer)
    usecases = build_usecases(
        inventory=order.inventory, customers=customers, clock=clock, settings=settings
    )
    result = place(usecases, order.customer.customer_id.value, order.lines)
    return _report(result, presenter)


def run_demo(
    presenter: ReceiptPresenter,
    clock: Callable[[], date] = date.today,
    settings: Settings | None = None,
) -> int:
    usecases = build_usecases(clock=clock, settings=settings)
    result = place(usecases, DEMO_CUSTOMER_ID, DEMO_LINES)
    return _report(result, presenter)


def place(
    usecases: UseCases, customer_id: str, lines: Sequence[Tuple[str, int]]
) -> Result[Receipt, CheckoutError]:
    """Open a cart for the customer, add every line, then check out."""

    def add_lines(view: CartView) -> Result[CartView, CheckoutError]:
        current: Result[CartView, CheckoutError] = Success(view)
        for product, quantity in lines:
            current = current.bind(
                lambda v, p=product, q=quantity: usecases.add_to_cart.add_to_cart(
                    AddToCartCommand(cart_id=str(v.cart_id.value), product=p, quantity=q)
                )
            )
        return current

    return flow(
        OpenCartCommand(customer_id=customer_id),
        usecases.open_cart.open_cart,
        bind(add_lines),
        bind(
            lambda view: usecases.checkout.checkout(
                CheckoutCommand(customer_id=customer_id, cart_id=str(view.cart_id.value))
            )
        ),
    )


def _report(result: Result[Receipt, CheckoutError], presenter: ReceiptPresenter) -> int:
    if isinstance(result, Success):
        presenter.present(result.unwrap())
        return 0

    err = result.failure()
    print("[ng]", str(err))
    return 1


def _parse_order(payload: dict[str, Any]) -> CliOrder:
    raw_customer = payload.get("customer") or {}
    customer = Customer(
        customer_id=CustomerId(str(raw_customer.get("id", DEMO_CUSTOMER_ID))),
        name=str(raw_customer.get("name", "")),
        balance=Money.of(str(raw_customer["balance"])),
    )
    if customer.balance.is_negative():
        raise ValueError("customer.balance must be >= 0")

    inventory: InMemoryInventory | None = None
    if "products" in payload:
        inventory = InMemoryInventory()
        for x in payload["products"]:
            product = _parse_product(x)
            if isinstance(inventory.product(product.name), Success):
                raise ValueError(f"duplicate product: {product.name}")
            inventory.stock(product, _whole_number(x["stock"], "stock"))

    lines = [
        (str(x["product"]), _whole_number(x["quantity"], "quantity"))
        for x in payload.get("lines", [])
    ]
    return CliOrder(customer=customer, inventory=inventory, lines=lines)


def _whole_number(raw: Any, what: str) -> int:
    # int() would quietly truncate 2.5
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        raise ValueError(f"{what} must be a whole number: {raw!r}")
    return int(raw)


def _parse_product(x: dict[str, Any]) -> Product:
    price = Decimal(str(x["price"]))
    weight = Decimal(str(x.get("weight", "0")))
    if x.get("expires_on") is not None:
        return expirable(
            str(x["name"]), price, date.fromisoformat(str(x["expires_on"])), weight
        )
    return non_expirable(
        str(x["name"]),
        price,
        requires_shipping=bool(x.get("requires_shipping", False)),
        weight=weight,
    )
