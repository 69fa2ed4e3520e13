# backend/studiosync/api/dependencies/database.py
"""
Database-related dependencies.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from ...database import get_db as original_get_db


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        Session bound to the application's ``Database``, closed after use
    """
    yield from original_get_db(request)
