"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from cliquealo.main import app
from cliquealo.db.database import IN_MEMORY_SQLITE_URL, create_db_engine, get_db, init_db
from cliquealo.db.models import Base, Bank


# Create a shared test database engine
test_engine = create_db_engine(IN_MEMORY_SQLITE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override database dependency for testing."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Override the dependency globally for all tests
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and drop after."""
    init_db(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create database session for test setup."""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def test_bank(db_session):
    """Create a test bank."""
    bank = Bank(nombre="BBVA", tasa=12.5, cat=16.2, comision=2.0)
    db_session.add(bank)
    db_session.commit()
    db_session.refresh(bank)
    return bank
