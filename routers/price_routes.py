# routers/price_routes.py
from typing import Dict

from fastapi import APIRouter, Depends, Request

from config.settings import RATE_LIMIT_PRICES
from middleware.rate_limit import limiter
from services.desktop.state import get_price_oracle
from services.prices.price_oracle import PriceOracle

router = APIRouter()


@router.get("", response_model=Dict[str, float])
@limiter.limit(RATE_LIMIT_PRICES)
async def get_prices(
    request: Request,
    oracle: PriceOracle = Depends(get_price_oracle),
):
    """
    Current USD prices per symbol.
    Always answers: falls back to the last known prices when CoinGecko is down.
    """
    return await oracle.fetch_prices()
