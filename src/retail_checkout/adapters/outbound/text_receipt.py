from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List

from retail_checkout.core.domain.model.receipt import Receipt
from retail_checkout.core.domain.model.shipment import ShipmentNotice
from retail_checkout.core.ports.outbound.presenter import ReceiptPresenter

RULE = "-" * 22


def render_shipment_notice(notice: ShipmentNotice) -> List[str]:
    if notice.is_empty():
        return []
    out = ["** Shipment notice **"]
    out.extend(f"{ln.quantity}x {ln.name} {ln.grams}g" for ln in notice.lines)
    out.append(f"Total package weight {notice.total_weight_kg}kg")
    return out


def render_receipt(receipt: Receipt) -> str:
    """Shipment notice (if anything ships) followed by the checkout receipt.

    Money is shown truncated to whole units; the balance is shown as stored.
    """
    out = render_shipment_notice(receipt.shipment)
    out.append("** Checkout receipt **")
    out.extend(
        f"{ln.quantity}x {ln.name} {ln.display_total}" for ln in receipt.lines
    )
    out.append(RULE)
    out.append(f"Subtotal {receipt.subtotal.truncated()}")
    out.append(f"Shipping {receipt.shipping_fee.truncated()}")
    out.append(f"Amount {receipt.total.truncated()}")
    out.append(f"Customer balance after payment: {receipt.balance_after.amount}")
    return "\n".join(out)


@dataclass
class TextReceiptPresenter(ReceiptPresenter):
    write: Callable[[str], None] = field(default=print)

    def present(self, receipt: Receipt) -> None:
        self.write(render_receipt(receipt))
