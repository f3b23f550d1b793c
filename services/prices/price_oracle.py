# services/prices/price_oracle.py
from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

from config.settings import COINGECKO_API_URL, PRICE_HTTP_TIMEOUT_SEC
from utils.common_helpers import safe_float, safe_json

logger = logging.getLogger(__name__)

COINGECKO_IDS: Dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDC": "usd-coin",
    "USDT": "tether",
}

# Used until the first successful fetch, and whenever CoinGecko is unreachable.
DEFAULT_PRICES: Dict[str, float] = {
    "BTC": 97000.0,
    "ETH": 3650.0,
    "SOL": 230.0,
    "USDC": 1.0,
    "USDT": 1.0,
}


class PriceOracleError(Exception):
    pass


class PriceOracle:
    """
    USD prices for the tracked symbols from CoinGecko's simple/price endpoint.

    fetch_prices() never raises: on failure it returns the last known prices,
    and a symbol missing from a successful response keeps its last value.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        url: str = COINGECKO_API_URL,
        timeout: float = PRICE_HTTP_TIMEOUT_SEC,
    ) -> None:
        self._client = client
        self._url = url
        self._timeout = timeout
        self._last_prices: Dict[str, float] = dict(DEFAULT_PRICES)
        self.last_error: Optional[str] = None

    @property
    def last_prices(self) -> Dict[str, float]:
        return dict(self._last_prices)

    async def _get(self, params: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self._url, params=params)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.get(self._url, params=params)

    async def _fetch_raw(self) -> Dict[str, dict]:
        params = {"ids": ",".join(COINGECKO_IDS.values()), "vs_currencies": "usd"}
        try:
            r = await self._get(params)
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise PriceOracleError(f"price request failed: {e}") from e

        data = safe_json(r)
        if data is None:
            raise PriceOracleError("price response is not a JSON object")
        return data

    async def fetch_prices(self) -> Dict[str, float]:
        try:
            data = await self._fetch_raw()
        except PriceOracleError as e:
            self.last_error = str(e)
            logger.warning("price_fetch_failed error=%s, keeping last known prices", e)
            return self.last_prices

        prices = dict(self._last_prices)
        for symbol, cg_id in COINGECKO_IDS.items():
            entry = data.get(cg_id)
            usd = safe_float(entry.get("usd")) if isinstance(entry, dict) else None
            if usd is not None and usd > 0:
                prices[symbol] = usd

        self._last_prices = prices
        self.last_error = None
        return dict(prices)
