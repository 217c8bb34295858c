"""Tests for the shipping fee and shipment breakdown."""

from decimal import Decimal

from retail_checkout.core.domain.model.cart import CartEntry
from retail_checkout.core.domain.model.money import Money
from retail_checkout.core.domain.model.shipment import ShippableItem
from retail_checkout.core.domain.service.shipping import (
    RATE_PER_KG,
    shipment_notice,
    shippable_items,
    shipping_fee,
    total_weight,
)


def _items():
    return (
        ShippableItem("Cheese", Decimal("0.2"), 2),
        ShippableItem("Biscuits", Decimal("0.7"), 1),
    )


class TestShippingFee:
    def test_rate_is_ten_per_kg(self):
        assert RATE_PER_KG == Decimal("10.0")

    def test_empty_set_costs_exactly_zero(self):
        fee = shipping_fee(())
        assert fee == Money.zero()
        assert fee.amount == 0

    def test_fee_is_weight_times_quantity_times_rate(self):
        assert total_weight(_items()) == Decimal("1.1")
        assert shipping_fee(_items()) == Money.of("11.0")

    def test_weightless_shippable_items_cost_nothing(self):
        fee = shipping_fee((ShippableItem("Voucher", Decimal("0"), 3),))
        assert fee.amount == 0

    def test_custom_rate(self):
        assert shipping_fee(_items(), rate_per_kg=Decimal("2")) == Money.of("2.2")


class TestShippableItems:
    def test_only_products_that_need_shipping(self, cheese, scratch_card, tv):
        entries = (
            CartEntry(cheese, 2),
            CartEntry(scratch_card, 1),
            CartEntry(tv, 1),
        )
        items = shippable_items(entries)
        assert [i.name for i in items] == ["Cheese", "TV"]
        assert items[0] == ShippableItem("Cheese", Decimal("0.2"), 2)


class TestShipmentNotice:
    def test_lines_in_grams_and_total_in_kg(self):
        notice = shipment_notice(_items())
        assert [(ln.quantity, ln.name, ln.grams) for ln in notice.lines] == [
            (2, "Cheese", 400),
            (1, "Biscuits", 700),
        ]
        assert notice.total_weight_kg == Decimal("1.1")

    def test_grams_are_truncated(self):
        notice = shipment_notice((ShippableItem("Feather", Decimal("0.0005"), 3),))
        assert notice.lines[0].grams == 1

    def test_empty_notice(self):
        notice = shipment_notice(())
        assert notice.is_empty()
        assert notice.total_weight_kg == 0
