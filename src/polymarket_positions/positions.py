"""Position statistics and combined position/balance lookups."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from polymarket_positions.chain.balance import UsdcBalanceProvider
from polymarket_positions.config import Settings, settings as default_settings
from polymarket_positions.data.client import fetch_data, positions_url
from polymarket_positions.errors import ConfigurationError

logger = logging.getLogger(__name__)


class Position(BaseModel):
    """One open position as reported by the Data API.

    Numeric fields stay None when the API omits them; zero is substituted
    only when aggregating.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    condition_id: str | None = Field(default=None, alias="conditionId")
    current_value: float | None = Field(default=None, alias="currentValue")
    initial_value: float | None = Field(default=None, alias="initialValue")
    percent_pnl: float | None = Field(default=None, alias="percentPnl")

    proxy_wallet: str | None = Field(default=None, alias="proxyWallet")
    asset: str | None = None
    size: float | None = None
    avg_price: float | None = Field(default=None, alias="avgPrice")
    cash_pnl: float | None = Field(default=None, alias="cashPnl")
    cur_price: float | None = Field(default=None, alias="curPrice")
    title: str | None = None
    slug: str | None = None
    outcome: str | None = None
    outcome_index: int | None = Field(default=None, alias="outcomeIndex")
    end_date: str | None = Field(default=None, alias="endDate")
    redeemable: bool | None = None


class PositionStats(BaseModel):
    total_value: float = 0.0
    initial_value: float = 0.0
    weighted_pnl: float = 0.0
    overall_pnl: float = 0.0


class UserPositionsAndBalance(BaseModel):
    positions: list[Position]
    balance: float


class MyPositionsAndBalance(BaseModel):
    positions: list[Position]
    usdc_balance: float
    total_balance: float


class DataFetcher(Protocol):
    async def __call__(self, url: str) -> Any: ...


class BalanceProvider(Protocol):
    async def get_balance(self, address: str) -> float: ...


def calculate_position_stats(positions: Iterable[Position]) -> PositionStats:
    """Aggregate value, entry value and value-weighted P&L over *positions*."""
    total_value = 0.0
    initial_value = 0.0
    weighted_pnl = 0.0

    for pos in positions:
        value = pos.current_value or 0.0
        total_value += value
        initial_value += pos.initial_value or 0.0
        weighted_pnl += value * (pos.percent_pnl or 0.0)

    overall_pnl = weighted_pnl / total_value if total_value > 0 else 0.0

    return PositionStats(
        total_value=total_value,
        initial_value=initial_value,
        weighted_pnl=weighted_pnl,
        overall_pnl=overall_pnl,
    )


def positions_value(positions: Iterable[Position]) -> float:
    """Sum of current values, treating missing values as zero."""
    return sum((pos.current_value or 0.0 for pos in positions), 0.0)


def find_position_by_condition_id(
    positions: Iterable[Position],
    condition_id: str,
) -> Position | None:
    """Return the first position with the given condition ID, if any."""
    return next((pos for pos in positions if pos.condition_id == condition_id), None)


def parse_positions(payload: Any) -> list[Position]:
    """Turn a raw positions response into Position models.

    Anything other than a list yields no positions; list items that are not
    JSON objects are skipped.
    """
    if not isinstance(payload, list):
        if payload:
            logger.warning("Expected a list of positions, got %s", type(payload).__name__)
        return []

    positions: list[Position] = []
    for item in payload:
        if not isinstance(item, Mapping):
            logger.warning("Skipping malformed position entry: %r", item)
            continue
        positions.append(Position.model_validate(dict(item)))
    return positions


class PositionHelpers:
    """Fetches positions and balances through injected collaborators."""

    def __init__(
        self,
        fetch: DataFetcher | None = None,
        balance_provider: BalanceProvider | None = None,
        config: Settings | None = None,
    ) -> None:
        self.fetch = fetch or fetch_data
        self.balance_provider = balance_provider or UsdcBalanceProvider()
        self.config = config or default_settings

    def positions_url(self, address: str) -> str:
        return positions_url(address, base=self.config.data_api_url)

    async def _fetch_positions(self, address: str) -> list[Position]:
        payload = await self.fetch(self.positions_url(address))
        return parse_positions(payload)

    async def fetch_user_positions_and_balance(self, user_address: str) -> UserPositionsAndBalance:
        """Fetch a user's positions and the total current value of them."""
        positions = await self._fetch_positions(user_address)
        balance = positions_value(positions)
        logger.debug("%d position(s) for %s worth $%.2f", len(positions), user_address, balance)
        return UserPositionsAndBalance(positions=positions, balance=balance)

    async def fetch_my_positions_and_balance(self) -> MyPositionsAndBalance:
        """Fetch the proxy wallet's positions, USDC balance and total balance."""
        wallet = self.config.proxy_wallet
        if not wallet:
            raise ConfigurationError("PROXY_WALLET is not set")
        positions = await self._fetch_positions(wallet)
        usdc_balance = await self.balance_provider.get_balance(wallet)
        total_balance = usdc_balance + positions_value(positions)
        logger.info(
            "Proxy wallet %s: usdc=$%.2f positions=%d total=$%.2f",
            wallet, usdc_balance, len(positions), total_balance,
        )
        return MyPositionsAndBalance(
            positions=positions,
            usdc_balance=usdc_balance,
            total_balance=total_balance,
        )


_default_helpers: PositionHelpers | None = None


def _get_helpers() -> PositionHelpers:
    global _default_helpers
    if _default_helpers is None:
        _default_helpers = PositionHelpers()
    return _default_helpers


async def fetch_user_positions_and_balance(user_address: str) -> UserPositionsAndBalance:
    """Fetch positions and their combined value for *user_address*."""
    return await _get_helpers().fetch_user_positions_and_balance(user_address)


async def fetch_my_positions_and_balance() -> MyPositionsAndBalance:
    """Fetch the configured proxy wallet's positions and USDC balance."""
    return await _get_helpers().fetch_my_positions_and_balance()
