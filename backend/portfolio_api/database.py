# backend/portfolio_api/database.py
import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseUnavailable(RuntimeError):
    """Raised when a write is attempted without a configured database."""

    def __init__(self, message: str = "Database not available"):
        super().__init__(message)


class Database:
    """Process-wide database handle.

    Built once by the application factory and shared by every request. A missing
    URL or a failing engine construction leaves the handle permanently
    unavailable: reads then degrade to empty results and writes raise.
    """

    def __init__(self, url: Optional[str], **engine_kwargs):
        self.url = url
        self.engine = None
        self.SessionLocal = None
        if not url:
            logger.warning("[Database] DATABASE_URL is not set; running without persistence")
            return
        try:
            self.engine = create_engine(url, **engine_kwargs)
            self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        except Exception as e:
            logger.warning("[Database] Failed to connect: %s", e)
            self.engine = None
            self.SessionLocal = None

    @property
    def available(self) -> bool:
        return self.SessionLocal is not None

    def session(self) -> Optional[Session]:
        if not self.available:
            return None
        return self.SessionLocal()

    def create_all(self):
        if self.engine is not None:
            Base.metadata.create_all(bind=self.engine)

    def dispose(self):
        if self.engine is not None:
            self.engine.dispose()


# Dependency to get a DB session (None when the database is unavailable)
def get_db(request: Request) -> Iterator[Optional[Session]]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        if db is not None:
            db.close()
