# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from config.logging_config import configure_logging
from config.settings import CORS_ORIGINS, INITIAL_USDC_AMOUNT, PRICE_POLL_ENABLED, PRICE_REFRESH_SEC
from database import SessionLocal, init_db
from middleware.rate_limit import limiter
from middleware.request_logging import RequestLoggingMiddleware
from routers.portfolio_routes import router as portfolio_router
from routers.price_routes import router as price_router
from routers.window_routes import router as window_router
from services.desktop.state import DesktopState
from services.portfolio.ledger_store import load_ledger
from services.prices.price_poller import PricePoller

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()

    state = DesktopState.create(initial_usdc=INITIAL_USDC_AMOUNT)
    db = SessionLocal()
    try:
        load_ledger(db, state.ledger)
    finally:
        db.close()
    app.state.desktop = state

    poller = PricePoller(state.oracle, state.ledger, PRICE_REFRESH_SEC)
    if PRICE_POLL_ENABLED:
        poller.start()
    try:
        yield
    finally:
        await poller.stop()


app = FastAPI(title="Wallet Desktop", lifespan=lifespan)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(window_router, prefix="/api/windows")
app.include_router(portfolio_router, prefix="/api/portfolio")
app.include_router(price_router, prefix="/api/prices")
