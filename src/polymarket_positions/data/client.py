"""Data API client for positions."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from polymarket_positions.config import settings
from polymarket_positions.errors import NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def positions_url(address: str, base: str | None = None) -> str:
    """Build the Data API positions URL for *address*."""
    base = (base or settings.data_api_url).rstrip("/")
    return str(httpx.URL(f"{base}/positions", params={"user": address}))


async def fetch_data(url: str, client: httpx.AsyncClient | None = None) -> Any:
    """GET *url* and return the parsed JSON body.

    An empty or ``null`` body is returned as an empty list.  Transport
    errors, non-2xx responses and undecodable bodies raise NetworkError.
    """
    if not url:
        raise NetworkError("Invalid URL provided", url=url)

    logger.debug("GET %s", url)
    try:
        if client is None:
            async with httpx.AsyncClient(
                timeout=settings.request_timeout,
                headers={"User-Agent": USER_AGENT},
            ) as own_client:
                resp = await own_client.get(url)
        else:
            resp = await client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        raise NetworkError(f"HTTP {status} from {url}", url=url) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"Request to {url} failed: {exc}", url=url) from exc

    text = resp.text.strip()
    if not text or text == "null":
        return []
    try:
        return resp.json()
    except ValueError as exc:
        logger.warning("Failed to parse JSON. Response preview: %s", text[:200])
        raise NetworkError(f"Failed to parse response from {url}: {exc}", url=url) from exc

