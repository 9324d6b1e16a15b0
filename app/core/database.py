"""Database connection and session management."""

import logging
from collections.abc import Callable, Generator
from typing import Any, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, settings
from app.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def engine_options(app_settings: Settings) -> dict[str, Any]:
    """
    Keyword arguments for create_engine, bounded by DB_TIMEOUT_SEC.

    A slow or unreachable database must fail the request instead of stalling it:
    the pool wait, the connect and (on Postgres) every statement are capped.
    """
    timeout = app_settings.DB_TIMEOUT_SEC
    if app_settings.DATABASE_URL.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False, "timeout": timeout},
            "echo": app_settings.DEBUG,
        }
    return {
        "pool_pre_ping": True,
        "pool_timeout": timeout,
        "connect_args": {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        },
        "echo": app_settings.DEBUG,
    }


engine = create_engine(settings.DATABASE_URL, **engine_options(settings))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def run_guarded(db: Session, operation: str, fn: Callable[[], T]) -> T:
    """
    Run fn against db, mapping connection failures and pool/statement timeouts
    to StoreUnavailableError (503) after rolling the session back.
    """
    try:
        return fn()
    except (OperationalError, PoolTimeoutError) as e:
        db.rollback()
        logger.error(
            "Store unavailable",
            extra={"operation": operation, "error_type": type(e).__name__},
        )
        raise StoreUnavailableError() from e
