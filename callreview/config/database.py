"""Database handle and session dependency using SQLAlchemy."""

from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

# Base class for models
Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one process.

    Created in the application lifespan and torn down with dispose().
    Services never reach for a global connection; they receive a Session
    produced by this handle.
    """

    def __init__(self, url: str, echo: bool = False, pool_size: int = 5, max_overflow: int = 10):
        self.url = url

        if url.startswith("sqlite"):
            # In-memory SQLite must share a single connection across sessions
            self.engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                url,
                echo=echo,
                pool_pre_ping=True,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    def session(self) -> Session:
        """Open a new session bound to this database."""
        return self.session_factory()

    def create_all(self) -> None:
        """Create all tables (development and tests)."""
        # Import all models to register them with Base
        from callreview import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage:
        @router.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.query(Item).all()
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
