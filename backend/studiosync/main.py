# backend/studiosync/main.py
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from starlette.middleware.gzip import GZipMiddleware

from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .core.process_hooks import install_process_error_logging
from .database import Database
from .errors import register_error_handlers
from .middleware.rate_limiter_asgi import RateLimitMiddlewareASGI
from .middleware.security_headers_asgi import SecurityHeadersMiddlewareASGI
from .middleware.timing_asgi import TimingMiddlewareASGI
from .routes import include_routers

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown without deprecated events."""
    logger.info(f"{BRAND_NAME} API starting up...")
    logger.info(f"Environment: {settings.environment}")
    if is_running_tests():
        logger.info("Running under pytest (test mode active)")

    if getattr(app.state, "db", None) is None:
        app.state.db = Database()
    install_process_error_logging(asyncio.get_running_loop())
    logger.info(f"Database dialect: {app.state.db.dialect_name}")

    yield

    logger.info(f"{BRAND_NAME} API shutting down...")
    app.state.db.dispose()


def _unique_operation_id(route: APIRoute) -> str:
    methods = "_".join(sorted(m.lower() for m in route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "").strip("_")
    name = (route.name or "operation").lower().replace(" ", "_")
    return f"{methods}__{path}__{name}".strip("_")


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the ASGI application.

    Args:
        database: Store handle to use instead of the one built from settings
            at startup (tests pass an in-memory SQLite database here)
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
        generate_unique_id_function=_unique_operation_id,
    )
    app.state.db = database

    register_error_handlers(app)

    # Added innermost first; CORS ends up outermost so 429s carry CORS headers
    app.add_middleware(RateLimitMiddlewareASGI)
    app.add_middleware(TimingMiddlewareASGI)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(SecurityHeadersMiddlewareASGI)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.client_url],
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    logger.info("CORS allow_origins=%s allow_credentials=%s", [settings.client_url], True)

    include_routers(app)
    return app


app = create_app()
