#!/usr/bin/env python3
# backend/run.py
"""
Development server runner.

Usage:
    python run.py
"""
from pathlib import Path
import sys

backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))

import uvicorn

from studiosync.core.config import settings

if __name__ == "__main__":
    print(f"Starting StudioSync API on http://localhost:{settings.port}")
    print(f"API Docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "studiosync.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
