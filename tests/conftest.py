"""
Shared test fixtures: SQLite test database, test client, seeded data.
"""

import os
import tempfile
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Settings are read at import time, so configure before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="farmconnect-uploads-")
os.environ["CROP_ANALYSIS_DELAY_SECONDS"] = "0"
os.environ["DISEASE_ANALYSIS_DELAY_SECONDS"] = "0"
os.environ["REFERENCE_DATA_PATH"] = ""

from farmconnect.database import Base, get_db
from farmconnect.data_provider import get_data_provider
from farmconnect.main import app
from farmconnect.seed import seed_all


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded(db):
    """Sample marketplace listings, documents, profile and settings."""
    return seed_all(db, get_data_provider())
