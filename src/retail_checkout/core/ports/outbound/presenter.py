from __future__ import annotations

from typing import Protocol

from retail_checkout.core.domain.model.receipt import Receipt


class ReceiptPresenter(Protocol):
    def present(self, receipt: Receipt) -> None: ...
