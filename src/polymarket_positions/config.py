"""Configuration via pydantic-settings, loaded from .env."""

from __future__ import annotations

import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_valid_ethereum_address(address: str) -> bool:
    return bool(_ADDRESS_RE.match(address))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore",
    )

    # Wallet
    proxy_wallet: str = ""  # Polymarket proxy wallet (funder) address

    # Polygon
    rpc_url: str = "https://polygon-rpc.com"
    usdc_contract_address: str = "0x2791Bca1f2de4661ED88A30C99A7a9449Aa84174"

    # API endpoints
    data_api_url: str = "https://data-api.polymarket.com"

    # HTTP
    request_timeout_ms: int = 10_000

    @field_validator("proxy_wallet", "usdc_contract_address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        value = value.strip()
        if value and not is_valid_ethereum_address(value):
            raise ValueError(f"Invalid address format: {value!r} (expected 0x + 40 hex chars)")
        return value

    @property
    def request_timeout(self) -> float:
        return self.request_timeout_ms / 1000


settings = Settings()
