from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping

ENV_PREFIX = "RETAIL_CHECKOUT_"


@dataclass(frozen=True)
class Settings:
    env: str = "development"  # development | test | staging | production
    log_level: str | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    seed_balance: Decimal = Decimal("1000")

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        defaults = Settings()

        raw_port = env.get(f"{ENV_PREFIX}PORT", str(defaults.port))
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}PORT must be an integer: {raw_port!r}")

        raw_balance = env.get(f"{ENV_PREFIX}SEED_BALANCE", str(defaults.seed_balance))
        try:
            seed_balance = Decimal(raw_balance)
        except InvalidOperation:
            raise ValueError(
                f"{ENV_PREFIX}SEED_BALANCE must be a decimal: {raw_balance!r}"
            )
        if seed_balance < 0:
            raise ValueError(f"{ENV_PREFIX}SEED_BALANCE must be >= 0")

        return Settings(
            env=env.get(f"{ENV_PREFIX}ENV", defaults.env).lower(),
            log_level=env.get("LOG_LEVEL"),
            host=env.get(f"{ENV_PREFIX}HOST", defaults.host),
            port=port,
            seed_balance=seed_balance,
        )
