"""Database engine and session factory sized from configuration"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from credit_scoring.config import settings


def build_engine(database_url: str, max_connections: int) -> Engine:
    """
    Create an engine whose pool never exceeds max_connections.

    Half the budget stays open; the rest is overflow opened under load
    and closed again when returned.
    """
    pool_size = max(1, max_connections // 2)
    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=pool_size,
        max_overflow=max(0, max_connections - pool_size),
        pool_recycle=3600,
    )


engine = build_engine(settings.database_url, settings.database_max_connections)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a score store session for one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
