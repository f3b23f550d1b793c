# routers/portfolio_routes.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database import get_db
from schemas.portfolio import (
    AssetPerformanceOut,
    BuyRequest,
    PortfolioOut,
    PriceUpdateOut,
    PriceUpdateRequest,
    ReceiveRequest,
    SendRequest,
    SwapRequest,
    TokenBalanceOut,
)
from services.desktop.state import get_ledger
from services.portfolio.ledger import STABLE_SYMBOL, PortfolioLedger
from services.portfolio.ledger_store import save_ledger
from services.portfolio.performance import portfolio_performance

router = APIRouter()


def _portfolio_out(ledger: PortfolioLedger) -> PortfolioOut:
    balances = ledger.balances()
    perf = portfolio_performance(balances)
    return PortfolioOut(
        balances=[TokenBalanceOut.model_validate(b) for b in balances],
        total_value_usd=ledger.get_total_value_usd(),
        usdc_balance=ledger.get_usdc_balance(),
        initial_usdc_amount=ledger.initial_usdc_amount,
        crypto_value_usd=perf.crypto_value_usd,
        overall_performance_pct=perf.overall_performance_pct,
        assets=[AssetPerformanceOut.model_validate(a) for a in perf.assets],
    )


def _insufficient(ledger: PortfolioLedger, symbol, amount: float) -> bool:
    token = ledger.get(symbol)
    return token is None or amount > token.amount


def _commit(db: Session, ledger: PortfolioLedger) -> PortfolioOut:
    save_ledger(db, ledger)
    return _portfolio_out(ledger)


@router.get("", response_model=PortfolioOut)
async def get_portfolio(ledger: PortfolioLedger = Depends(get_ledger)):
    return _portfolio_out(ledger)


@router.post("/swap", response_model=PortfolioOut)
async def swap(
    payload: SwapRequest,
    db: Session = Depends(get_db),
    ledger: PortfolioLedger = Depends(get_ledger),
):
    if payload.from_symbol == payload.to_symbol:
        raise HTTPException(status_code=400, detail="Cannot swap an asset for itself")
    if _insufficient(ledger, payload.from_symbol, payload.from_amount):
        raise HTTPException(status_code=409, detail=f"Insufficient {payload.from_symbol.value}")

    if not ledger.swap(payload.from_symbol, payload.to_symbol, payload.from_amount, payload.current_price):
        raise HTTPException(status_code=409, detail="Swap rejected")
    return _commit(db, ledger)


@router.post("/buy", response_model=PortfolioOut)
async def buy(
    payload: BuyRequest,
    db: Session = Depends(get_db),
    ledger: PortfolioLedger = Depends(get_ledger),
):
    if payload.symbol == STABLE_SYMBOL:
        raise HTTPException(status_code=400, detail=f"Cannot buy {STABLE_SYMBOL.value} with itself")
    if _insufficient(ledger, STABLE_SYMBOL, payload.usd_amount):
        raise HTTPException(status_code=409, detail=f"Insufficient {STABLE_SYMBOL.value}")

    if not ledger.swap(STABLE_SYMBOL, payload.symbol, payload.usd_amount, payload.current_price):
        raise HTTPException(status_code=409, detail="Buy rejected")
    return _commit(db, ledger)


@router.post("/send", response_model=PortfolioOut)
async def send(
    payload: SendRequest,
    db: Session = Depends(get_db),
    ledger: PortfolioLedger = Depends(get_ledger),
):
    if _insufficient(ledger, payload.symbol, payload.amount):
        raise HTTPException(status_code=409, detail=f"Insufficient {payload.symbol.value}")

    if not ledger.send(payload.symbol, payload.amount):
        raise HTTPException(status_code=409, detail="Send rejected")
    return _commit(db, ledger)


@router.post("/receive", response_model=PortfolioOut)
async def receive(
    payload: ReceiveRequest,
    db: Session = Depends(get_db),
    ledger: PortfolioLedger = Depends(get_ledger),
):
    if not ledger.receive(payload.symbol, payload.amount, payload.price):
        raise HTTPException(status_code=409, detail="Receive rejected")
    return _commit(db, ledger)


@router.post("/prices", response_model=PriceUpdateOut)
async def update_prices(
    payload: PriceUpdateRequest,
    ledger: PortfolioLedger = Depends(get_ledger),
):
    return PriceUpdateOut(updated=ledger.update_prices(payload.prices))


@router.post("/reset", response_model=PortfolioOut)
async def reset_portfolio(
    db: Session = Depends(get_db),
    ledger: PortfolioLedger = Depends(get_ledger),
):
    ledger.reset()
    return _commit(db, ledger)
