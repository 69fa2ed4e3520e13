# backend/studiosync/database.py
"""
Database engine, session factory, and metadata shared across the application.

The store handle is an explicit ``Database`` object. The application
lifespan creates one, keeps it on ``app.state.db`` and disposes it on
shutdown; request handlers receive sessions through ``get_db``.
"""

from contextlib import contextmanager
from datetime import datetime
import logging
from typing import Any, Generator, Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker

from .core.config import settings

logger = logging.getLogger(__name__)

Base: DeclarativeMeta = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Log pool events for monitoring
def _receive_connect(dbapi_connection: Any, connection_record: Any) -> None:
    connection_record.info["connect_time"] = datetime.now()
    logger.debug("Database connection established")


class Database:
    """Owns one SQLAlchemy engine and the session factory bound to it."""

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None, **engine_kwargs: Any):
        if engine is None:
            url = url or settings.database_url
            kwargs = settings.engine_kwargs() if url == settings.database_url else {}
            kwargs.update(engine_kwargs)
            engine = create_engine(url, **kwargs)
        self.engine: Engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False
        )

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        event.listen(self.engine, "connect", _receive_connect)

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def session(self) -> Generator[Session, None, None]:
        """Yield a session that commits on success and rolls back on error."""
        db = self.SessionLocal()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context-manager form of ``session`` for scripts and commands."""
        yield from self.session()

    def ping(self) -> None:
        """Run a trivial query; raises if the store is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_all(self) -> None:
        # Models must be imported so their tables are registered on Base.metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session with proper cleanup."""
    database: Database = request.app.state.db
    yield from database.session()
