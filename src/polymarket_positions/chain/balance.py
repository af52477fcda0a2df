"""USDC balance lookups on Polygon."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from web3 import AsyncWeb3

from polymarket_positions.config import settings

logger = logging.getLogger(__name__)

USDC_DECIMALS = 6

# Minimal ERC-20 ABI for balance reads
ERC20_BALANCE_OF_ABI: list[dict[str, Any]] = [
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "type": "function",
    }
]


class UsdcBalanceProvider:
    """Reads USDC balances through the ERC-20 ``balanceOf`` call."""

    def __init__(
        self,
        rpc_url: str | None = None,
        token_address: str | None = None,
        w3: AsyncWeb3 | None = None,
    ) -> None:
        self.rpc_url = rpc_url or settings.rpc_url
        self.token_address = token_address or settings.usdc_contract_address
        self.w3 = w3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.rpc_url))

    async def get_balance(self, address: str) -> float:
        """Return the USDC balance of *address* in whole-dollar units."""
        contract = self.w3.eth.contract(
            address=self.w3.to_checksum_address(self.token_address),
            abi=ERC20_BALANCE_OF_ABI,
        )
        owner = self.w3.to_checksum_address(address)
        raw = await contract.functions.balanceOf(owner).call()
        balance = float(Decimal(raw) / Decimal(10**USDC_DECIMALS))
        logger.info("USDC balance for %s: raw=%s parsed=$%.2f", owner, raw, balance)
        return balance

