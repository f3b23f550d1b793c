# services/portfolio/performance.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from services.portfolio.ledger import STABLE_SYMBOL, TokenBalance
from utils.common_helpers import pct_change


@dataclass(frozen=True)
class AssetPerformance:
    symbol: str
    name: str
    amount: float
    current_price: float
    purchase_price: float
    current_value: float
    performance_pct: float


@dataclass(frozen=True)
class PortfolioPerformance:
    crypto_value_usd: float
    overall_performance_pct: float
    assets: List[AssetPerformance]


def asset_performance(token: TokenBalance, live_price: Optional[float] = None) -> AssetPerformance:
    price = token.price_usd if live_price is None else live_price
    # A zero basis means nothing was ever paid for; report flat.
    perf = pct_change(price, token.purchase_price) if token.purchase_price > 0 else None
    return AssetPerformance(
        symbol=token.symbol.value,
        name=token.name,
        amount=token.amount,
        current_price=price,
        purchase_price=token.purchase_price,
        current_value=token.amount * price,
        performance_pct=perf or 0.0,
    )


def portfolio_performance(
    balances: List[TokenBalance],
    live_prices: Optional[Mapping[str, float]] = None,
) -> PortfolioPerformance:
    """
    Performance over owned crypto (stablecoin excluded), weighted by current
    value. Zero holdings are skipped since their basis is not meaningful.
    """
    live_prices = live_prices or {}
    assets = [
        asset_performance(b, live_prices.get(b.symbol.value))
        for b in balances
        if b.symbol != STABLE_SYMBOL and b.amount > 0
    ]
    total = sum(a.current_value for a in assets)
    overall = 0.0
    if total > 0:
        overall = sum(a.performance_pct * (a.current_value / total) for a in assets)
    return PortfolioPerformance(
        crypto_value_usd=total,
        overall_performance_pct=overall,
        assets=assets,
    )
