import logging
import os
import threading
from contextlib import contextmanager

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from goat_admin.models import ContactMessage, Goat, Video  # noqa: F401

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_engine_lock = threading.Lock()


class DatabaseError(Exception):
    """Custom exception for database operations."""

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


def get_database_url() -> str:
    if os.environ.get("PYTEST_VERSION"):
        return os.environ.get("TEST_DATABASE_URL", "sqlite:///./test_goat_admin.db")
    return os.environ["DATABASE_URL"]


def get_engine() -> Engine:
    global _engine
    if _engine is not None:
        return _engine

    with _engine_lock:
        if _engine is None:
            _engine = _create_engine()
    return _engine


def _create_engine() -> Engine:
    database_url = get_database_url()
    echo = os.environ.get("SQL_ECHO") == "1"

    if database_url.startswith("sqlite"):
        # Sync endpoints run in a thread pool
        return create_engine(
            database_url, echo=echo, connect_args={"check_same_thread": False}
        )
    return create_engine(
        database_url,
        echo=echo,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,
    )


def create_tables():
    SQLModel.metadata.create_all(get_engine())


async def initialize_database():
    """Create the database tables."""
    try:
        create_tables()
        logger.info("Database initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise DatabaseError("Failed to initialize database", original_error=e)


def drop_database():
    """Drop the database tables."""
    SQLModel.metadata.drop_all(get_engine())
    logger.info("Database dropped successfully.")


@contextmanager
def get_db_session():
    session = Session(get_engine())
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database operation failed: {e}")
        # Raise a concealed database error
        raise DatabaseError("Database operation failed", original_error=e)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
