"""Database session management."""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from smartmenu.core.config import settings

connect_args = {}
pool_config = {}

if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
    pool_config = {"pool_pre_ping": True}
else:
    pool_config = {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=False,
    **pool_config,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Get database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Type alias for dependency injection
DbSession = Annotated[Session, Depends(get_db)]
