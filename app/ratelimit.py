"""Per-client, per-path request throttling for the JSON API.

The limiter is a small component with an ``allow(key)`` method so it can be
swapped out (tests inject a tight one; multi-instance deployments point the
storage URI at redis so every worker shares the same counters).
"""
import logging
from flask import request
from flask_limiter.util import get_remote_address
from limits import parse
from limits.storage import storage_from_string
from limits.strategies import MovingWindowRateLimiter

from app.utils.responses import error
from app.version import API_PREFIX

RETRY_AFTER_SECONDS = 60


class RateLimiter:
    """Moving-window request counter keyed by an arbitrary string."""

    def __init__(self, limit="100 per minute", storage_uri="memory://"):
        self.limit = parse(limit)
        # memory:// storage expires stale keys on its own timer
        self.storage = storage_from_string(storage_uri)
        self._strategy = MovingWindowRateLimiter(self.storage)

    def allow(self, key: str) -> bool:
        return self._strategy.hit(self.limit, key)

    def reset(self) -> None:
        self.storage.reset()


def client_key() -> str:
    # remote_addr already reflects TRUSTED_PROXY_HOPS via ProxyFix
    return f"{get_remote_address() or 'unknown'}:{request.path}"


def init_rate_limiting(app, limiter=None):
    if limiter is None:
        limiter = RateLimiter(
            app.config.get("API_RATE_LIMIT", "100 per minute"),
            app.config.get("RATELIMIT_STORAGE_URL", "memory://"),
        )
    app.extensions["rate_limiter"] = limiter

    @app.before_request
    def _throttle_api():
        if not request.path.startswith(f"{API_PREFIX}/"):
            return None
        key = client_key()
        if app.extensions["rate_limiter"].allow(key):
            return None
        logging.getLogger(__name__).warning("rate limit exceeded for %s", key)
        resp, status = error(
            "Too many requests. Please try again later.",
            status=429,
            code="RATE_LIMITED",
        )
        resp.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
        return resp, status

    return limiter
