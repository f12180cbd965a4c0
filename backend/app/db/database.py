# backend/app/db/database.py

"""
Database Configuration

``Database`` owns the SQLAlchemy engine and session factory. One instance is
opened when the application starts (see ``app.main.lifespan``), kept on
``app.state.database`` and disposed at shutdown.
"""

from contextlib import contextmanager
from typing import Generator, Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.logger import logger

Base = declarative_base()


class Database:
    """Engine + session factory with an explicit open/close lifecycle."""

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        echo: bool = False,
    ):
        if url.startswith("sqlite"):
            # A single shared connection so in-memory databases survive across sessions
            self.engine = create_engine(
                url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=echo,
            )
        else:
            self.engine = create_engine(
                url,
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
                echo=echo,
            )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def create_all(self) -> None:
        """Create any missing tables. Does not alter existing ones."""
        from app.db import models  # noqa: F401  registers the mappers

        logger.info("Creating missing database tables...")
        Base.metadata.create_all(bind=self.engine)

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session for code running outside a request (scripts, jobs)."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connections released")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    database: Database = request.app.state.database
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
