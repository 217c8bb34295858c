"""Rendering of shipment notice and checkout receipt."""

from decimal import Decimal
from uuid import uuid4

from retail_checkout.adapters.outbound.text_receipt import (
    TextReceiptPresenter,
    render_receipt,
    render_shipment_notice,
)
from retail_checkout.core.domain.model.cart import CartId
from retail_checkout.core.domain.model.customer import CustomerId
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.receipt import Receipt, ReceiptLine
from retail_checkout.core.domain.model.shipment import (
    ShipmentLine,
    ShipmentNotice,
)


def _receipt(shipment):
    return Receipt(
        cart_id=CartId(uuid4()),
        customer_id=CustomerId("c-1"),
        lines=(
            ReceiptLine("Cheese", 2, Money.of("99.99"), Money.of("199.98")),
            ReceiptLine("Scratch Card", 1, Money.of(50), Money.of(50)),
        ),
        shipment=shipment,
        subtotal=Money.of("249.98"),
        shipping_fee=Money.of("4.00"),
        total=Money.of("253.98"),
        balance_after=Money.of("746.02"),
    )


NOTICE = ShipmentNotice(
    lines=(ShipmentLine("Cheese", 2, 400),), total_weight_kg=Decimal("0.4")
)


def test_shipment_notice_lines():
    assert render_shipment_notice(NOTICE) == [
        "** Shipment notice **",
        "2x Cheese 400g",
        "Total package weight 0.4kg",
    ]


def test_receipt_truncates_money():
    text = render_receipt(_receipt(NOTICE))
    assert text.splitlines() == [
        "** Shipment notice **",
        "2x Cheese 400g",
        "Total package weight 0.4kg",
        "** Checkout receipt **",
        "2x Cheese 199",
        "1x Scratch Card 50",
        "----------------------",
        "Subtotal 249",
        "Shipping 4",
        "Amount 253",
        "Customer balance after payment: 746.02",
    ]


def test_no_shipment_notice_when_nothing_ships():
    text = render_receipt(_receipt(ShipmentNotice(lines=(), total_weight_kg=Decimal("0"))))
    assert text.splitlines()[0] == "** Checkout receipt **"


def test_presenter_writes_rendered_text():
    out = []
    TextReceiptPresenter(write=out.append).present(_receipt(NOTICE))
    assert out == [render_receipt(_receipt(NOTICE))]
