"""Database connection and session management."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from opsgate.core.config import settings


def _connect_args(database_url: str, timeout_sec: float) -> dict[str, Any]:
    """Driver-level timeouts so a stuck store lookup errors out instead of hanging."""
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": timeout_sec}
    return {
        "connect_timeout": max(1, int(timeout_sec)),
        "options": f"-c statement_timeout={int(timeout_sec * 1000)}",
    }


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=_connect_args(settings.DATABASE_URL, settings.DATABASE_TIMEOUT_SEC),
)

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
