"""
Database engine and session factory
"""

import logging
from functools import lru_cache
from typing import Any, Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from shlink_visits.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_engine() -> Engine:
    """Create the engine for the configured database"""
    settings = get_settings()
    connect_args = {}
    if settings.database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    # Log without credentials
    logger.info(f"Database: {settings.database_url.split('@')[-1]}")
    return create_engine(
        settings.database_url, echo=settings.debug, connect_args=connect_args
    )


def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def get_db() -> Generator[Session, Any, None]:
    """Yield a session and close it once the caller is done"""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
