"""Per-client rate limiting for requests that trigger upstream feed fetches."""

import logging
from collections.abc import Awaitable, Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store
from throttled.rate_limiter import Quota

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0


def extract_client_ip(request: Request) -> str:
    """Client address, preferring the first hop of X-Forwarded-For."""
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    client_ip = forwarded_for.split(",")[0].strip()
    if client_ip:
        return client_ip
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket per client IP, applied to POST requests on the given paths."""

    def __init__(
        self,
        app: Callable,
        requests_per_minute: int = 60,
        limited_paths: Iterable[str] = ("/api/departures",),
    ) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Requests allowed per client IP per minute; 0 disables limiting.
            limited_paths: Paths whose POST requests count against the quota.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.limited_paths = frozenset(limited_paths)
        self._quota: Quota | None = None
        self._store: store.MemoryStore | None = None
        if requests_per_minute > 0:
            self._quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
            # Buckets live in the store, which expires idle keys
            self._store = store.MemoryStore()
            logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")

    def _throttle_for(self, client_ip: str) -> Throttled:
        return Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self._quota,
            store=self._store,
        )

    def _is_limited_request(self, request: Request) -> bool:
        if self._quota is None:
            return False
        return request.method == "POST" and request.url.path in self.limited_paths

    @staticmethod
    def _retry_after(result: object) -> float:
        state = getattr(result, "state", None)
        return float(getattr(state, "retry_after", None) or DEFAULT_RETRY_AFTER_SECONDS)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request with 429 once the client's quota is used up."""
        if not self._is_limited_request(request):
            return await call_next(request)

        client_ip = extract_client_ip(request)
        result = self._throttle_for(client_ip).limit()
        if result.limited:
            retry_after = self._retry_after(result)
            logger.warning(f"Rate limit exceeded for {client_ip}, retry after {retry_after:.0f}s")
            return JSONResponse(
                {"error": "Rate limit exceeded. Please try again later."},
                status_code=429,
                headers={"Retry-After": str(max(1, int(retry_after)))},
            )

        return await call_next(request)
