# services/desktop/state.py
"""
Process-scoped owners of the two containers.

main.py builds one DesktopState and puts it on app.state; routes reach it
through the dependencies below instead of module globals.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from fastapi import Request

from services.desktop.window_manager import WindowManager
from services.portfolio.ledger import INITIAL_USDC_AMOUNT, PortfolioLedger
from services.prices.price_oracle import PriceOracle


@dataclass
class DesktopState:
    windows: WindowManager = field(default_factory=WindowManager)
    ledger: PortfolioLedger = field(default_factory=PortfolioLedger)
    oracle: PriceOracle = field(default_factory=PriceOracle)

    @classmethod
    def create(cls, initial_usdc: float = INITIAL_USDC_AMOUNT) -> "DesktopState":
        return cls(ledger=PortfolioLedger(initial_usdc=initial_usdc))


def get_desktop_state(request: Request) -> DesktopState:
    return request.app.state.desktop


def get_window_manager(request: Request) -> WindowManager:
    return get_desktop_state(request).windows


def get_ledger(request: Request) -> PortfolioLedger:
    return get_desktop_state(request).ledger


def get_price_oracle(request: Request) -> PriceOracle:
    return get_desktop_state(request).oracle
