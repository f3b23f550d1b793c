# services/prices/price_poller.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

from services.portfolio.ledger import PortfolioLedger
from services.prices.price_oracle import PriceOracle

logger = logging.getLogger(__name__)


class PricePoller:
    """Feeds oracle prices into the ledger on a fixed interval."""

    def __init__(self, oracle: PriceOracle, ledger: PortfolioLedger, interval_sec: float) -> None:
        self.oracle = oracle
        self.ledger = ledger
        self.interval_sec = max(float(interval_sec), 0.5)
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def tick(self) -> int:
        prices = await self.oracle.fetch_prices()
        return self.ledger.update_prices(prices)

    async def _run(self) -> None:
        while True:
            try:
                updated = await self.tick()
                logger.debug("price_poll updated=%d", updated)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("price_poll tick failed")
            await asyncio.sleep(self.interval_sec)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("price_poller started interval=%.1fs", self.interval_sec)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("price_poller stopped")
