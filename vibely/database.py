"""
Database connection and session management for Vibely Backend
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from vibely.core.config import Settings

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    SQLite is used for local runs and tests; an in-memory SQLite database is
    pinned to a single shared connection so every session sees the same data.
    """
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url == "sqlite://":
            options["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **options)

    # Create database engine with connection pooling
    return create_engine(
        database_url,
        pool_pre_ping=True,      # Test connections before using
        pool_size=10,            # Connection pool size
        max_overflow=20,         # Overflow connections allowed
        echo=echo
    )


class Database:
    """Engine and session factory owned by one application instance"""

    def __init__(self, engine: Engine):
        self.engine = engine
        # Session factory for creating database sessions
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO))

    def init_db(self) -> None:
        """Initialize database tables"""
        # Models must be imported so their tables are registered on Base
        import vibely.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Iterator[Session]:
        """
        Yield a session and always close it.

        Usage in FastAPI endpoints goes through ``vibely.core.dependencies.get_db``.
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Commit everything done in the block as one unit, or roll it all back.

        with atomic(db):
            users.add_to_friend_set(a, b)
            users.add_to_friend_set(b, a)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
