"""Application-wide constants for the StudioSync API."""

from __future__ import annotations

BRAND_NAME = "StudioSync"
API_TITLE = f"{BRAND_NAME} API"
API_DESCRIPTION = "Studio, equipment and reservation booking for recording artists."
API_VERSION = "1.0.0"

# Paths never counted by the rate limiter
RATE_LIMIT_EXEMPT_PREFIXES = ("/api/health", "/api/test")

# Query limits
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Day of week mapping; index matches StudioAvailability.day_of_week (0 = Sunday)
DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

SLOW_REQUEST_THRESHOLD_MS = 500
