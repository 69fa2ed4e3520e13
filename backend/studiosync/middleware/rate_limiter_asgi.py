"""
Pure ASGI Rate Limit Middleware

Applies the fixed-window limiter to every HTTP request except OPTIONS
preflights and the exempt path prefixes.
"""

import logging
from typing import Optional

from starlette.datastructures import MutableHeaders
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.config import settings
from ..core.constants import RATE_LIMIT_EXEMPT_PREFIXES
from ..core.exceptions import ErrorCode
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def _extract_client_ip(scope: Scope) -> str:
    """Return the client address, preferring the first X-Forwarded-For hop."""
    for name, value in scope.get("headers") or []:
        if name == b"x-forwarded-for":
            forwarded = value.decode("latin-1").split(",")[0].strip()
            if forwarded:
                return forwarded
    client = scope.get("client")
    if client:
        return str(client[0])
    return "unknown"


class RateLimitMiddlewareASGI:
    """ASGI middleware that enforces the per-client request budget."""

    def __init__(
        self,
        app: ASGIApp,
        limiter: Optional[RateLimiter] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        self.app = app
        self.limiter = limiter or RateLimiter()
        self.enabled = settings.rate_limit_enabled if enabled is None else enabled

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.enabled:
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        method = scope.get("method", "")
        if method == "OPTIONS" or path.startswith(RATE_LIMIT_EXEMPT_PREFIXES):
            await self.app(scope, receive, send)
            return

        client_ip = _extract_client_ip(scope)
        result = self.limiter.check(client_ip)
        rate_headers = {
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": str(result.reset_at),
        }

        if not result.allowed:
            logger.warning(
                f"[RATE_LIMIT] 429 for {client_ip} on {method} {path}; "
                f"retry in {result.retry_after}s"
            )
            response = JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "error": "Too many requests, please try again later.",
                    "code": ErrorCode.RATE_LIMITED.value,
                },
                headers={"Retry-After": str(result.retry_after), **rate_headers},
            )
            await response(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in rate_headers.items():
                    headers[name] = value
            await send(message)

        await self.app(scope, receive, send_wrapper)
