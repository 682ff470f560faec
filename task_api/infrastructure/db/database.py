"""
Database configuration and session management.
"""

from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from task_api.config import settings


def _connect_args(database_url: str) -> dict:
    # SQLite connections are shared across FastAPI worker threads
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Create SQLAlchemy engine
engine = create_engine(
    settings.database_url,
    connect_args=_connect_args(settings.database_url),
    pool_pre_ping=True,
    echo=settings.debug,
)

# Create SessionLocal class
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Create declarative base
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create every table known to the ORM metadata."""
    # Import models so they register with Base.metadata
    from task_api.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """Drop every table known to the ORM metadata."""
    from task_api.infrastructure.db import models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
