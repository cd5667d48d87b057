from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import math
import time
from typing import Callable, Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

MAX_TRACKED_CLIENTS = 10000


def get_client_key(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class FixedWindowCounter:
    """
    Per-key request counter. A key's window opens on its first request and
    allows `max_requests` until `window_seconds` have passed.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        # key -> (count, reset_at)
        self.windows: Dict[str, Tuple[int, float]] = {}

    def _cleanup(self, now: float):
        if len(self.windows) <= MAX_TRACKED_CLIENTS:
            return
        for key in [k for k, (_, reset_at) in self.windows.items() if now > reset_at]:
            del self.windows[key]

    def hit(self, key: str) -> Tuple[bool, int, float]:
        """Count one request. Returns (allowed, remaining, seconds until reset)."""
        now = self.clock()
        self._cleanup(now)

        record = self.windows.get(key)
        if record is None or now > record[1]:
            self.windows[key] = (1, now + self.window_seconds)
            return True, self.max_requests - 1, self.window_seconds

        count, reset_at = record
        if count >= self.max_requests:
            return False, 0, max(0.0, reset_at - now)

        self.windows[key] = (count + 1, reset_at)
        return True, self.max_requests - count - 1, max(0.0, reset_at - now)


class FixedWindowRateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        max_requests: int = 100,
        window_seconds: float = 60,
        protected_paths: Optional[List[str]] = None,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.protected_paths = protected_paths or ["/sportsdata"]
        self.counter = FixedWindowCounter(max_requests, window_seconds, clock=clock)

    def _is_protected(self, path: str) -> bool:
        return any(path.startswith(prefix) for prefix in self.protected_paths)

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS" or not self._is_protected(request.url.path):
            return await call_next(request)

        client_key = get_client_key(request)
        allowed, remaining, reset_in = self.counter.hit(client_key)

        if not allowed:
            retry_after = max(1, math.ceil(reset_in))
            logger.warning(f"Rate limit exceeded for {client_key} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Please try again later.",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)

        return response
