# services/portfolio/ledger.py
"""
Simulated asset ledger for the demo wallet.

Every operation validates before it mutates. A failed precondition (unknown
symbol, insufficient balance, bad amount) leaves the ledger untouched and the
call returns False; nothing is raised. Callers either pre-check (e.g. the buy
flow's "Insufficient USDC") or treat False / an unchanged balance as the
failure signal.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from services.portfolio.cost_basis import new_basis

logger = logging.getLogger(__name__)


class Symbol(str, Enum):
    USDC = "USDC"
    BTC = "BTC"
    ETH = "ETH"
    SOL = "SOL"


STABLE_SYMBOL = Symbol.USDC
INITIAL_USDC_AMOUNT = 100_000.0


@dataclass
class TokenBalance:
    symbol: Symbol
    name: str
    amount: float
    price_usd: float
    # Only meaningful while amount > 0.
    purchase_price: float

    @property
    def value_usd(self) -> float:
        return self.amount * self.price_usd


def default_balances(initial_usdc: float = INITIAL_USDC_AMOUNT) -> Dict[Symbol, TokenBalance]:
    return {
        Symbol.USDC: TokenBalance(Symbol.USDC, "USD Coin", initial_usdc, 1.0, 1.0),
        Symbol.BTC: TokenBalance(Symbol.BTC, "Bitcoin", 0.0, 97_000.0, 0.0),
        Symbol.ETH: TokenBalance(Symbol.ETH, "Ethereum", 0.0, 3_650.0, 0.0),
        Symbol.SOL: TokenBalance(Symbol.SOL, "Solana", 0.0, 230.0, 0.0),
    }


SymbolKey = Union[Symbol, str]


def resolve_symbol(value: Any) -> Optional[Symbol]:
    if isinstance(value, Symbol):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Symbol(value.strip().upper())
    except ValueError:
        return None


def _positive(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x) and x > 0


def _non_negative(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x) and x >= 0


class PortfolioLedger:
    def __init__(self, initial_usdc: float = INITIAL_USDC_AMOUNT) -> None:
        self._initial_usdc = initial_usdc
        self._balances = default_balances(initial_usdc)

    # ─── Read access ─────────────────────────────────────────────

    @property
    def initial_usdc_amount(self) -> float:
        return self._initial_usdc

    def get(self, symbol: SymbolKey) -> Optional[TokenBalance]:
        sym = resolve_symbol(symbol)
        if sym is None:
            return None
        return replace(self._balances[sym])

    def balances(self) -> List[TokenBalance]:
        return [replace(b) for b in self._balances.values()]

    def get_total_value_usd(self) -> float:
        return sum(b.amount * b.price_usd for b in self._balances.values())

    def get_usdc_balance(self) -> float:
        return self._balances[STABLE_SYMBOL].amount

    # ─── Operations ──────────────────────────────────────────────

    def swap(
        self,
        from_symbol: SymbolKey,
        to_symbol: SymbolKey,
        from_amount: float,
        current_price: Optional[float] = None,
    ) -> bool:
        src_sym = resolve_symbol(from_symbol)
        dst_sym = resolve_symbol(to_symbol)
        if src_sym is None or dst_sym is None:
            return self._reject("swap", "unknown symbol", from_symbol, to_symbol)
        if src_sym == dst_sym:
            return self._reject("swap", "same symbol on both legs", from_symbol, to_symbol)
        if not _positive(from_amount):
            return self._reject("swap", "amount must be positive", from_symbol, to_symbol)

        src = self._balances[src_sym]
        dst = self._balances[dst_sym]
        if from_amount > src.amount:
            return self._reject("swap", "insufficient balance", from_symbol, to_symbol)

        buy_price = dst.price_usd if current_price is None else current_price
        if not _positive(buy_price):
            return self._reject("swap", "no usable price", from_symbol, to_symbol)

        # Outgoing leg valued at the source's stored price.
        usd_value = from_amount * src.price_usd
        to_amount = usd_value / buy_price
        basis = new_basis(dst.amount, dst.purchase_price, to_amount, buy_price)

        src.amount -= from_amount
        dst.amount += to_amount
        dst.price_usd = buy_price
        dst.purchase_price = basis

        logger.info(
            "ledger_swap from=%s to=%s from_amount=%s to_amount=%.8f price=%s",
            src_sym.value, dst_sym.value, from_amount, to_amount, buy_price,
        )
        return True

    def send(self, symbol: SymbolKey, amount: float) -> bool:
        sym = resolve_symbol(symbol)
        if sym is None:
            return self._reject("send", "unknown symbol", symbol)
        if not _positive(amount):
            return self._reject("send", "amount must be positive", symbol)

        token = self._balances[sym]
        if amount > token.amount:
            return self._reject("send", "insufficient balance", symbol)

        token.amount -= amount
        logger.info("ledger_send symbol=%s amount=%s", sym.value, amount)
        return True

    def receive(self, symbol: SymbolKey, amount: float, price: Optional[float] = None) -> bool:
        sym = resolve_symbol(symbol)
        if sym is None:
            return self._reject("receive", "unknown symbol", symbol)
        if not _positive(amount):
            return self._reject("receive", "amount must be positive", symbol)

        token = self._balances[sym]
        receive_price = token.price_usd if price is None else price
        # zero is a valid cost (gift, airdrop)
        if not _non_negative(receive_price):
            return self._reject("receive", "no usable price", symbol)

        token.purchase_price = new_basis(token.amount, token.purchase_price, amount, receive_price)
        token.amount += amount
        logger.info("ledger_receive symbol=%s amount=%s price=%s", sym.value, amount, receive_price)
        return True

    def update_prices(self, prices: Mapping[str, Any]) -> int:
        """
        Refresh price_usd for tracked symbols. Holdings and basis are untouched.
        Zero, negative and non-numeric quotes are dropped.
        """
        updated = 0
        for key, price in prices.items():
            sym = resolve_symbol(key)
            if sym is None or not _positive(price):
                continue
            self._balances[sym].price_usd = float(price)
            updated += 1
        return updated

    def reset(self) -> None:
        self._balances = default_balances(self._initial_usdc)
        logger.info("ledger_reset initial_usdc=%s", self._initial_usdc)

    # ─── Persistence hooks ───────────────────────────────────────

    def snapshot(self) -> List[Dict[str, Any]]:
        return [
            {
                "symbol": b.symbol.value,
                "name": b.name,
                "amount": b.amount,
                "price_usd": b.price_usd,
                "purchase_price": b.purchase_price,
            }
            for b in self._balances.values()
        ]

    def restore(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """
        Load persisted balances. Rows for unknown symbols, rows that would
        break amount >= 0 and rows with a non-finite basis are skipped;
        symbols with no row keep their seed.
        """
        restored = 0
        for row in rows:
            sym = resolve_symbol(row.get("symbol"))
            if sym is None:
                continue
            try:
                amount = float(row.get("amount", 0.0))
                price = float(row.get("price_usd", 0.0))
                basis = float(row.get("purchase_price", 0.0))
            except (TypeError, ValueError):
                continue
            if amount < 0 or not math.isfinite(amount) or not math.isfinite(basis):
                continue

            token = self._balances[sym]
            token.amount = amount
            if _positive(price):
                token.price_usd = price
            token.purchase_price = basis
            restored += 1
        return restored

    @staticmethod
    def _reject(op: str, reason: str, *symbols: Any) -> bool:
        logger.info("ledger_rejected op=%s reason=%s symbols=%s", op, reason, symbols)
        return False
