# config/settings.py
import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "1") -> bool:
    return (os.getenv(name, default) or "").strip().lower() in ("1", "true", "yes")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# ─── Database ──────────────────────────────────────────────────────
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./wallet_desktop.db")

# ─── Ledger ────────────────────────────────────────────────────────
INITIAL_USDC_AMOUNT = _env_float("INITIAL_USDC_AMOUNT", 100_000.0)

# ─── Price oracle ──────────────────────────────────────────────────
COINGECKO_API_URL = os.getenv(
    "COINGECKO_API_URL", "https://api.coingecko.com/api/v3/simple/price"
).rstrip("/")
PRICE_HTTP_TIMEOUT_SEC = _env_float("PRICE_HTTP_TIMEOUT_SEC", 5.0)
PRICE_REFRESH_SEC = _env_float("PRICE_REFRESH_SEC", 10.0)    # same cadence the wallet widget polls at
PRICE_POLL_ENABLED = _env_bool("PRICE_POLL_ENABLED", "1")

# ─── HTTP ──────────────────────────────────────────────────────────
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
RATE_LIMIT_DEFAULT = os.getenv("RATE_LIMIT_DEFAULT", "60/minute")
RATE_LIMIT_PRICES = os.getenv("RATE_LIMIT_PRICES", "30/minute")
