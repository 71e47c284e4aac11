import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from lead_admin.app.services.activity_recorder import client_ip

RATE_LIMITED_MESSAGE = "Too many requests, please try again later."


@dataclass
class _BucketState:
    tokens: float
    last_refill: float


class TokenBucketLimiter:
    """
    Per-key token bucket refilled continuously over the window.

    A bucket left untouched for a whole window is full again and is
    indistinguishable from a new one, so such buckets are pruned when a new
    key arrives (at most once per window).
    """

    def __init__(
        self,
        capacity: int,
        window_seconds: int = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.capacity = capacity
        self.window_seconds = window_seconds
        self.clock = clock
        self._buckets: Dict[str, _BucketState] = {}
        self._last_prune: float = clock()

    def take(self, key: str) -> Tuple[bool, int]:
        if self.capacity <= 0:
            return False, self.window_seconds

        now = self.clock()
        refill_rate = self.capacity / float(self.window_seconds)

        current = self._buckets.get(key)
        if current is None:
            self._prune(now)
            current = _BucketState(tokens=float(self.capacity), last_refill=now)
            self._buckets[key] = current

        elapsed = max(0.0, now - current.last_refill)
        current.tokens = min(float(self.capacity), current.tokens + (elapsed * refill_rate))
        current.last_refill = now

        if current.tokens < 1.0:
            retry_after = max(1, math.ceil((1.0 - current.tokens) / refill_rate))
            return False, retry_after

        current.tokens -= 1.0
        return True, 0

    def _prune(self, now: float) -> None:
        if now - self._last_prune < self.window_seconds:
            return
        self._last_prune = now
        idle = [
            key
            for key, state in self._buckets.items()
            if now - state.last_refill >= self.window_seconds
        ]
        for key in idle:
            del self._buckets[key]

    def __len__(self) -> int:
        return len(self._buckets)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Limits non-GET requests per client IP"""

    def __init__(self, app, per_minute: int = 50, enabled: bool = True):
        super().__init__(app)
        self.enabled = enabled
        self.limiter = TokenBucketLimiter(capacity=per_minute, window_seconds=60)

    async def dispatch(self, request: Request, call_next):
        if not self.enabled or request.method.upper() in ("GET", "HEAD", "OPTIONS"):
            return await call_next(request)

        host = request.client.host if request.client else None
        key = client_ip(request.headers, host) or "unknown"
        allowed, retry_after = self.limiter.take(key)
        if allowed:
            return await call_next(request)

        response = JSONResponse(
            status_code=429,
            content={
                "success": False,
                "error": RATE_LIMITED_MESSAGE,
                "code": "RATE_LIMITED",
            },
        )
        response.headers["Retry-After"] = str(retry_after)
        return response
