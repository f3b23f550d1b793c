import asyncio
import os
import unittest

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from services.portfolio.ledger import PortfolioLedger
from services.prices.price_poller import PricePoller


class _FakeOracle:
    def __init__(self, prices):
        self.prices = prices
        self.calls = 0

    async def fetch_prices(self):
        self.calls += 1
        return dict(self.prices)


class _ExplodingOracle:
    def __init__(self):
        self.calls = 0

    async def fetch_prices(self):
        self.calls += 1
        raise RuntimeError("boom")


class TestPricePoller(unittest.TestCase):
    def test_tick_updates_ledger_prices_only(self):
        ledger = PortfolioLedger()
        ledger.swap("USDC", "BTC", 10000, 50000)
        poller = PricePoller(_FakeOracle({"BTC": 61000, "USDT": 1.0}), ledger, interval_sec=1)

        updated = asyncio.run(poller.tick())

        self.assertEqual(updated, 1)
        self.assertEqual(ledger.get("BTC").price_usd, 61000)
        self.assertAlmostEqual(ledger.get("BTC").amount, 0.2)
        self.assertAlmostEqual(ledger.get("BTC").purchase_price, 50000)

    def test_start_and_stop(self):
        oracle = _FakeOracle({"SOL": 250})
        ledger = PortfolioLedger()
        poller = PricePoller(oracle, ledger, interval_sec=0.5)

        async def run():
            poller.start()
            poller.start()  # second start is a no-op
            await asyncio.sleep(0.05)
            running = poller.running
            await poller.stop()
            return running

        self.assertTrue(asyncio.run(run()))
        self.assertFalse(poller.running)
        self.assertEqual(oracle.calls, 1)
        self.assertEqual(ledger.get("SOL").price_usd, 250)

    def test_failing_tick_does_not_kill_loop(self):
        oracle = _ExplodingOracle()
        poller = PricePoller(oracle, PortfolioLedger(), interval_sec=0.5)

        async def run():
            poller.start()
            await asyncio.sleep(0.05)
            running = poller.running
            await poller.stop()
            return running

        with self.assertLogs("services.prices.price_poller", level="ERROR"):
            self.assertTrue(asyncio.run(run()))
        self.assertEqual(oracle.calls, 1)


if __name__ == "__main__":
    unittest.main()
