"""
Pure ASGI Timing Middleware

Logs every request with its status and duration and exposes the duration
in the ``X-Process-Time`` header.
"""

import logging
import time

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..core.constants import SLOW_REQUEST_THRESHOLD_MS

logger = logging.getLogger(__name__)


class TimingMiddlewareASGI:
    """
    Pure ASGI middleware to measure and log request processing time.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        method = scope.get("method", "")
        start_time = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                process_time = (time.perf_counter() - start_time) * 1000
                status_code = message.get("status", 0)

                headers = MutableHeaders(scope=message)
                headers["X-Process-Time"] = f"{process_time:.2f}ms"

                logger.info(f"{method} {path} {status_code} {process_time:.2f}ms")
                if process_time > SLOW_REQUEST_THRESHOLD_MS:
                    logger.warning(
                        f"[TIMING] Slow request: {method} {path} took {process_time:.2f}ms"
                    )

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            process_time = (time.perf_counter() - start_time) * 1000
            logger.error(f"[TIMING] Error in request {path} after {process_time:.2f}ms: {str(e)}")
            raise
