from __future__ import annotations

import sys

import uvicorn

from retail_checkout.adapters.inbound.cli import run_cli, run_demo
from retail_checkout.adapters.outbound.text_receipt import TextReceiptPresenter
from retail_checkout.config import Settings
from retail_checkout.utils.logging import configure_logging

USAGE = (
    "usage: python -m retail_checkout.main demo\n"
    "       python -m retail_checkout.main checkout '<json>'\n"
    "       python -m retail_checkout.main serve"
)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE)
        return 2

    settings = Settings.from_env()
    configure_logging(settings)
    presenter = TextReceiptPresenter()

    command, rest = argv[0], argv[1:]
    if command == "demo":
        return run_demo(presenter, settings=settings)
    if command == "checkout" and len(rest) == 1:
        return run_cli(rest[0], presenter, settings=settings)
    if command == "serve":
        uvicorn.run(
            "retail_checkout.asgi:app",
            host=settings.host,
            port=settings.port,
            reload=False,
        )
        return 0

    print(USAGE)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
