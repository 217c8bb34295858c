from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Callable, Tuple

import structlog
from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from retail_checkout.core.domain.model.cart import Cart, CartEntry, parse_cart_id
from retail_checkout.core.domain.model.customer import Customer, CustomerId
from retail_checkout.core.domain.model.errors import (
    CartConsumed,
    CheckoutError,
    EmptyCart,
    Expired,
    InsufficientFunds,
    OutOfStock,
    ValidationError,
)
from retail_checkout.core.domain.model.money import Money, fold_money
from retail_checkout.core.domain.model.receipt import Receipt, ReceiptLine
from retail_checkout.core.domain.model.shipment import ShippableItem
from retail_checkout.core.domain.service.shipping import (
    RATE_PER_KG,
    shipment_notice,
    shippable_items,
    shipping_fee,
)
from retail_checkout.core.ports.inbound.checkout import (
    CheckoutCommand,
    CheckoutUseCase,
)
from retail_checkout.core.ports.outbound.carts import CartRepository
from retail_checkout.core.ports.outbound.customers import CustomerRepository
from retail_checkout.core.ports.outbound.inventory import InventoryGateway, Reservation

logger = structlog.get_logger(__name__)


class CheckoutStage(str, Enum):
    PENDING = "PENDING"
    VALIDATED = "VALIDATED"
    SETTLED = "SETTLED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CheckoutDeps:
    inventory: InventoryGateway
    customers: CustomerRepository
    carts: CartRepository
    clock: Callable[[], date] = date.today
    rate_per_kg: Decimal = RATE_PER_KG
    # held from validation through commit; share it with CartDeps
    lock: threading.Lock = field(default_factory=threading.Lock)


@dataclass(frozen=True)
class CheckoutContext:
    customer: Customer
    cart: Cart
    today: date
    # entries as they were when checkout began
    entries: Tuple[CartEntry, ...] = ()
    stage: CheckoutStage = CheckoutStage.PENDING
    shippable: Tuple[ShippableItem, ...] = ()
    subtotal: Money = field(default_factory=Money.zero)
    shipping_fee: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)


@dataclass(frozen=True)
class CheckoutService(CheckoutUseCase):
    """Validate a cart against live stock and balance, then settle it.

    PENDING -> VALIDATED -> SETTLED, or REJECTED with no side effects. The
    whole sequence runs under ``deps.lock``.
    """

    deps: CheckoutDeps

    def checkout(self, command: CheckoutCommand) -> Result[Receipt, CheckoutError]:
        customer_id = command.customer_id.strip()
        if not customer_id:
            return self._rejected(
                command.cart_id, Failure(ValidationError("customer_id is required"))
            )

        loaded = parse_cart_id(command.cart_id).bind(self.deps.carts.get)
        if isinstance(loaded, Failure):
            return self._rejected(command.cart_id, loaded)

        return self.checkout_cart(CustomerId(customer_id), loaded.unwrap())

    def checkout_cart(
        self, customer_id: CustomerId, cart: Cart
    ) -> Result[Receipt, CheckoutError]:
        with self.deps.lock:
            result = flow(
                cart,
                _ensure_checkoutable,
                bind(lambda c: _ensure_owner(c, customer_id)),
                bind(self._begin),
                bind(self._revalidate),
                map_(self._price),
                bind(_verify_funds),
                bind(self._settle),
            )

        cart_id = str(cart.cart_id.value)
        if isinstance(result, Failure):
            return self._rejected(cart_id, result)

        receipt = result.unwrap()
        logger.info(
            "checkout.settled",
            cart_id=cart_id,
            stage=CheckoutStage.SETTLED.value,
            customer_id=customer_id.value,
            subtotal=str(receipt.subtotal.amount),
            shipping_fee=str(receipt.shipping_fee.amount),
            total=str(receipt.total.amount),
            balance_after=str(receipt.balance_after.amount),
        )
        return result

    # ---- stages ------------------------------------------------------------

    def _begin(self, cart: Cart) -> Result[CheckoutContext, CheckoutError]:
        return self.deps.customers.get(cart.customer_id).map(
            lambda customer: CheckoutContext(
                customer=customer,
                cart=cart,
                today=self.deps.clock(),
                entries=cart.items(),
            )
        )

    def _revalidate(
        self, ctx: CheckoutContext
    ) -> Result[CheckoutContext, CheckoutError]:
        # stock may have moved since the items were added
        for entry in ctx.entries:
            name = entry.product.name
            stock = self.deps.inventory.stock_of(name)
            if isinstance(stock, Failure):
                return stock
            if stock.unwrap() < entry.quantity:
                return Failure(
                    OutOfStock(
                        message=f"{name} is out of stock",
                        product=name,
                        requested=entry.quantity,
                        available=stock.unwrap(),
                    )
                )
            if entry.product.is_expired(ctx.today):
                return Failure(Expired(message=f"{name} has expired", product=name))

        return Success(replace(ctx, stage=CheckoutStage.VALIDATED))

    def _price(self, ctx: CheckoutContext) -> CheckoutContext:
        shippable = shippable_items(ctx.entries)
        subtotal = fold_money(e.total() for e in ctx.entries)
        fee = shipping_fee(shippable, rate_per_kg=self.deps.rate_per_kg)
        return replace(
            ctx,
            shippable=shippable,
            subtotal=subtotal,
            shipping_fee=fee,
            total=subtotal + fee,
        )

    # ---- side effects ------------------------------------------------------

    def _settle(self, ctx: CheckoutContext) -> Result[Receipt, CheckoutError]:
        cart = ctx.cart
        reservations = tuple(
            Reservation(product=e.product.name, quantity=e.quantity)
            for e in ctx.entries
        )

        cart.consume()
        saved = self.deps.carts.save(cart)
        if isinstance(saved, Failure):
            cart.reopen()
            return saved

        reserved = self.deps.inventory.reserve(reservations)
        if isinstance(reserved, Failure):
            self._reopen(cart)
            return reserved

        debited = self.deps.customers.debit(ctx.customer.customer_id, ctx.total)
        if isinstance(debited, Failure):
            released = self.deps.inventory.release(reservations)
            if isinstance(released, Failure):
                logger.error(
                    "checkout.release_failed",
                    cart_id=str(cart.cart_id.value),
                    error=str(released.failure()),
                )
            self._reopen(cart)
            return debited

        return Success(_to_receipt(ctx, debited.unwrap().balance))

    def _reopen(self, cart: Cart) -> None:
        cart.reopen()
        saved = self.deps.carts.save(cart)
        if isinstance(saved, Failure):
            logger.error(
                "checkout.reopen_failed",
                cart_id=str(cart.cart_id.value),
                error=str(saved.failure()),
            )

    def _rejected(
        self, cart_id: str, result: Result[Receipt, CheckoutError]
    ) -> Result[Receipt, CheckoutError]:
        err = result.failure()
        logger.info(
            "checkout.rejected",
            cart_id=cart_id,
            stage=CheckoutStage.REJECTED.value,
            error=type(err).__name__,
            reason=str(err),
        )
        return result


# ---- pure helpers ----------------------------------------------------------


def _ensure_checkoutable(cart: Cart) -> Result[Cart, CheckoutError]:
    if cart.is_empty():
        return Failure(
            EmptyCart(
                message="cannot checkout - cart is empty",
                cart_id=str(cart.cart_id.value),
            )
        )
    if cart.is_consumed():
        return Failure(
            CartConsumed(
                message="cart was already checked out",
                cart_id=str(cart.cart_id.value),
            )
        )
    return Success(cart)


def _ensure_owner(cart: Cart, customer_id: CustomerId) -> Result[Cart, CheckoutError]:
    if cart.customer_id != customer_id:
        return Failure(ValidationError("cart belongs to another customer"))
    return Success(cart)


def _verify_funds(ctx: CheckoutContext) -> Result[CheckoutContext, CheckoutError]:
    if not ctx.customer.can_afford(ctx.total):
        return Failure(
            InsufficientFunds(
                message="insufficient balance in customer account",
                required=ctx.total.amount,
                available=ctx.customer.balance.amount,
            )
        )
    return Success(ctx)


def _to_receipt(ctx: CheckoutContext, balance_after: Money) -> Receipt:
    lines = tuple(
        ReceiptLine(
            name=e.product.name,
            quantity=e.quantity,
            unit_price=e.product.price,
            total=e.total(),
        )
        for e in ctx.entries
    )
    return Receipt(
        cart_id=ctx.cart.cart_id,
        customer_id=ctx.customer.customer_id,
        lines=lines,
        shipment=shipment_notice(ctx.shippable),
        subtotal=ctx.subtotal,
        shipping_fee=ctx.shipping_fee,
        total=ctx.total,
        balance_after=balance_after,
    )
