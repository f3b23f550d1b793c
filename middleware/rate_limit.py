# middleware/rate_limit.py
"""
Rate limiting configuration using slowapi.

Usage in route files:
    from middleware.rate_limit import limiter

    @router.get("/prices")
    @limiter.limit("30/minute")
    async def my_endpoint(request: Request):
        ...

main.py registers the limiter on app.state and maps RateLimitExceeded to 429.
"""
import logging
import os

from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import RATE_LIMIT_DEFAULT

logger = logging.getLogger(__name__)

# Single-user demo: the caller's address is the only useful bucket.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT_DEFAULT],
    storage_uri=os.getenv("REDIS_URL", "memory://"),
    strategy="fixed-window",
    enabled=os.getenv("RATE_LIMIT_ENABLED", "1").lower() in ("1", "true", "yes"),
)
