"""
Database session management.

Provides SQLModel engine and session creation.
"""

from typing import Any, Generator

from sqlmodel import Session, create_engine

from app.core.config import settings

DATABASE_URL: str = settings.SQLALCHEMY_DATABASE_URI

engine_options: dict[str, Any] = {
    "echo": settings.DEBUG,  # Log SQL queries in debug mode
    "pool_pre_ping": True,   # Verify connections before using
}
if DATABASE_URL.startswith("sqlite"):
    engine_options["connect_args"] = {"check_same_thread": False}
else:
    engine_options.update(pool_size=5, max_overflow=10)

engine = create_engine(DATABASE_URL, **engine_options)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI endpoints to get database session.

    Yields:
        SQLModel Session instance

    Example:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            return db.exec(select(Item)).all()
    """
    with Session(engine) as session:
        yield session
