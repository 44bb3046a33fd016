"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Tables are created before each test and
dropped after it, so no test data persists.
"""

from datetime import date, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from money_manager.main import app
from money_manager.models import Base, Entry
from money_manager.models.base import get_db


# SQLite file database, so tests need no database server
TEST_DATABASE_URL = "sqlite:///./test.db"

OWNER = "alice@example.com"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables before each test, drop them after.

    autouse=True means every test gets this automatically.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    The get_db dependency is overridden so the app and the
    test share one session.
    """
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def entry_payload():
    """Build a JSON body for POST /api/income/add and /api/expense/minus."""
    def build(**overrides) -> dict:
        payload = {
            "owner": OWNER,
            "source": "Salary",
            "amount": "100",
            "paymentMethod": "Bank Transfer",
            "date": date.today().isoformat(),
            "time": "10:00",
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def age_entry(db_session):
    """Move an entry's creation time into the past."""
    def age(entry_id: int, delta: timedelta) -> None:
        entry = db_session.get(Entry, entry_id)
        entry.created_at = datetime.utcnow() - delta
        db_session.commit()
    return age
