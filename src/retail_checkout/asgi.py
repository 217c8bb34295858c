from __future__ import annotations

from retail_checkout.adapters.inbound.web.fastapi_app import create_app
from retail_checkout.bootstrap import build_usecases
from retail_checkout.config import Settings
from retail_checkout.utils.logging import configure_logging

settings = Settings.from_env()
configure_logging(settings)

usecases = build_usecases(settings=settings)
app = create_app(
    usecases.open_cart,
    usecases.add_to_cart,
    usecases.get_cart,
    usecases.checkout,
    usecases.list_products,
)
