"""Open / add / view cart use cases and the product listing."""

from datetime import timedelta
from decimal import Decimal
from uuid import uuid4

from returns.result import Success

from retail_checkout.core.domain.model.cart import CartStatus
from retail_checkout.core.domain.model.errors import (
    CartNotFound,
    CustomerNotFound,
    Expired,
    OutOfStock,
    ProductNotFound,
    ValidationError,
)
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.product import expirable
from retail_checkout.core.ports.inbound.carts import (
    AddToCartCommand,
    GetCartQuery,
    OpenCartCommand,
)


def _open(usecases, customer_id="c-1"):
    return str(usecases.open_cart.open_cart(OpenCartCommand(customer_id)).unwrap().cart_id.value)


def _add(usecases, cart_id, product, quantity):
    return usecases.add_to_cart.add_to_cart(
        AddToCartCommand(cart_id=cart_id, product=product, quantity=quantity)
    )


class TestOpenCart:
    def test_opens_empty_cart_for_known_customer(self, usecases):
        result = usecases.open_cart.open_cart(OpenCartCommand("c-1"))
        assert isinstance(result, Success)
        view = result.unwrap()
        assert view.customer_id.value == "c-1"
        assert view.status is CartStatus.OPEN
        assert view.lines == ()
        assert view.subtotal == Money.zero()

    def test_unknown_customer(self, usecases):
        result = usecases.open_cart.open_cart(OpenCartCommand("c-404"))
        assert isinstance(result.failure(), CustomerNotFound)

    def test_blank_customer(self, usecases):
        result = usecases.open_cart.open_cart(OpenCartCommand("   "))
        assert isinstance(result.failure(), ValidationError)


class TestAddToCart:
    def test_adds_and_merges(self, usecases):
        cart_id = _open(usecases)
        _add(usecases, cart_id, "Cheese", 2)
        view = _add(usecases, cart_id, "Cheese", 3).unwrap()
        assert [(ln.product, ln.quantity) for ln in view.lines] == [("Cheese", 5)]
        assert view.subtotal == Money.of(500)

    def test_does_not_touch_stock(self, usecases, inventory):
        cart_id = _open(usecases)
        _add(usecases, cart_id, "Cheese", 4)
        assert inventory.stock_of("Cheese").unwrap() == 10

    def test_reads_live_stock(self, usecases, inventory):
        cart_id = _open(usecases)
        inventory.set_stock("TV", 1)
        err = _add(usecases, cart_id, "TV", 2).failure()
        assert isinstance(err, OutOfStock)
        assert err.available == 1

    def test_merged_failure_keeps_previous_quantity(self, usecases):
        cart_id = _open(usecases)
        _add(usecases, cart_id, "Biscuits", 4)
        assert isinstance(_add(usecases, cart_id, "Biscuits", 2).failure(), OutOfStock)
        view = usecases.get_cart.get_cart(GetCartQuery(cart_id)).unwrap()
        assert [(ln.product, ln.quantity) for ln in view.lines] == [("Biscuits", 4)]

    def test_expired_product(self, usecases, inventory, today):
        inventory.stock(expirable("Old Bread", 10, today - timedelta(days=1), "0.3"), 5)
        cart_id = _open(usecases)
        assert isinstance(_add(usecases, cart_id, "Old Bread", 1).failure(), Expired)

    def test_unknown_product(self, usecases):
        cart_id = _open(usecases)
        assert isinstance(_add(usecases, cart_id, "Unicorn", 1).failure(), ProductNotFound)

    def test_blank_product(self, usecases):
        cart_id = _open(usecases)
        assert isinstance(_add(usecases, cart_id, "", 1).failure(), ValidationError)

    def test_unknown_cart(self, usecases):
        assert isinstance(_add(usecases, str(uuid4()), "Cheese", 1).failure(), CartNotFound)

    def test_zero_quantity(self, usecases):
        cart_id = _open(usecases)
        assert isinstance(_add(usecases, cart_id, "Cheese", 0).failure(), ValidationError)


class TestGetCart:
    def test_view_lines_and_totals(self, usecases):
        cart_id = _open(usecases)
        _add(usecases, cart_id, "Cheese", 2)
        _add(usecases, cart_id, "Scratch Card", 1)
        view = usecases.get_cart.get_cart(GetCartQuery(cart_id)).unwrap()
        assert str(view.cart_id.value) == cart_id
        assert [(ln.product, ln.unit_price, ln.total) for ln in view.lines] == [
            ("Cheese", Money.of(100), Money.of(200)),
            ("Scratch Card", Money.of(50), Money.of(50)),
        ]
        assert view.subtotal == Money.of(250)

    def test_malformed_id(self, usecases):
        assert isinstance(
            usecases.get_cart.get_cart(GetCartQuery("nope")).failure(), ValidationError
        )


class TestListProducts:
    def test_lists_catalogue_with_stock(self, usecases, today):
        views = usecases.list_products.list_products().unwrap()
        by_name = {v.name: v for v in views}
        assert list(by_name) == ["Cheese", "Biscuits", "Scratch Card", "TV"]
        assert by_name["Cheese"].stock == 10
        assert by_name["Cheese"].expires_on == today + timedelta(days=7)
        assert by_name["Cheese"].expired is False
        assert by_name["Scratch Card"].needs_shipping is False
        assert by_name["TV"].weight == Decimal("15.0")

    def test_reports_expired_products(self, usecases, clock):
        clock.advance(8)
        views = usecases.list_products.list_products().unwrap()
        assert {v.name for v in views if v.expired} == {"Cheese"}
