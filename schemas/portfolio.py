from __future__ import annotations

import math
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from services.portfolio.ledger import Symbol


def _finite(value: Optional[float]) -> Optional[float]:
    if value is not None and not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


class SwapRequest(BaseModel):
    from_symbol: Symbol
    to_symbol: Symbol
    from_amount: float = Field(gt=0)
    current_price: Optional[float] = Field(default=None, gt=0)

    @field_validator("from_amount", "current_price")
    @classmethod
    def validate_finite(cls, value: Optional[float]) -> Optional[float]:
        return _finite(value)


class BuyRequest(BaseModel):
    """Spend USDC on an asset at the quoted price."""

    symbol: Symbol
    usd_amount: float = Field(gt=0)
    current_price: Optional[float] = Field(default=None, gt=0)

    @field_validator("usd_amount", "current_price")
    @classmethod
    def validate_finite(cls, value: Optional[float]) -> Optional[float]:
        return _finite(value)


class SendRequest(BaseModel):
    symbol: Symbol
    amount: float = Field(gt=0)

    @field_validator("amount")
    @classmethod
    def validate_finite(cls, value: float) -> float:
        return _finite(value)


class ReceiveRequest(BaseModel):
    symbol: Symbol
    amount: float = Field(gt=0)
    price: Optional[float] = Field(default=None, ge=0)

    @field_validator("amount", "price")
    @classmethod
    def validate_finite(cls, value: Optional[float]) -> Optional[float]:
        return _finite(value)


class PriceUpdateRequest(BaseModel):
    # unknown symbols are accepted and ignored by the ledger
    prices: Dict[str, float]


class TokenBalanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: Symbol
    name: str
    amount: float
    price_usd: float
    purchase_price: float
    value_usd: float


class AssetPerformanceOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    name: str
    amount: float
    current_price: float
    purchase_price: float
    current_value: float
    performance_pct: float


class PortfolioOut(BaseModel):
    balances: List[TokenBalanceOut]
    total_value_usd: float
    usdc_balance: float
    initial_usdc_amount: float
    crypto_value_usd: float
    overall_performance_pct: float
    assets: List[AssetPerformanceOut]


class PriceUpdateOut(BaseModel):
    updated: int
