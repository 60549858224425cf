"""
Shared fixtures for the test suite
Run with: pytest shlink_visits -v
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_visits.db")

from datetime import datetime
from typing import Any, Callable, Generator, List, Optional
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from shlink_visits.models import Base, Domain, ShortUrl, Visit, VisitLocation
from shlink_visits.services import VisitRepository


# Test database URL (use SQLite for testing)
TEST_DATABASE_URL = "sqlite:///./test_visits.db"

# Create test engine
test_engine = create_engine(
    TEST_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, Any, None]:
    """Create test database and tables"""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def repository(test_db: Session) -> VisitRepository:
    return VisitRepository(test_db)


@pytest.fixture
def select_log() -> Generator[List[str], Any, None]:
    """Record every SELECT sent to the test database"""
    statements: List[str] = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):  # type: ignore[no-untyped-def]
        if statement.lstrip().upper().startswith("SELECT"):
            statements.append(statement)

    event.listen(test_engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(test_engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def make_short_url(test_db: Session) -> Callable[..., ShortUrl]:
    """Factory for short URLs, optionally on a named domain"""

    def factory(short_code: str, domain: Optional[str] = None) -> ShortUrl:
        short_url = ShortUrl(
            original_url=f"https://example.com/{short_code}",
            short_code=short_code,
            date_created=datetime(2024, 1, 1),
        )
        if domain is not None:
            existing = test_db.query(Domain).filter_by(authority=domain).one_or_none()
            short_url.domain = existing or Domain(authority=domain)

        test_db.add(short_url)
        test_db.flush()
        return short_url

    return factory


@pytest.fixture
def add_visit(test_db: Session) -> Callable[..., Visit]:
    """Factory for visits; each one gets the next id"""

    def factory(
        short_url: Optional[ShortUrl] = None,
        date: Optional[datetime] = None,
        location: Optional[VisitLocation] = None,
    ) -> Visit:
        visit = Visit(
            short_url=short_url,
            date=date or datetime(2024, 1, 1, 12, 0, 0),
            remote_addr="1.2.3.4",
            type="valid_short_url",
            potential_bot=False,
            location=location,
        )
        test_db.add(visit)
        test_db.flush()
        return visit

    return factory
