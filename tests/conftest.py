"""Pytest configuration and shared fixtures."""
import os

# Keep the app's own engine off disk while tests import it
os.environ.setdefault("FOMS_DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from foms.auth import Identity, create_access_token
from foms.database import Base, build_engine, get_db
from foms.models.domain import FomsRequest, FomsStatus, AuthSetting
from foms.services.request_store import RequestStore
from foms.services.status_catalog import StatusCatalog


class FakeClock:
    """Returns a strictly increasing time, one second per call."""

    def __init__(self, start=datetime(2026, 3, 1, 8, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture
def db_session():
    """Create a fresh in-memory database for each test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(engine)

    TestingSessionLocal = sessionmaker(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(db_session, clock):
    return RequestStore(db_session, clock=clock)


@pytest.fixture
def seeded_catalog(db_session):
    catalog = StatusCatalog(db_session)
    catalog.seed()
    return catalog


@pytest.fixture
def identity():
    return Identity(subject="user_123", email="reviewer@example.org")


@pytest.fixture
def request_fields():
    """Field set for a typical new request."""
    return dict(
        requested_datetime=datetime(2026, 3, 10, 14, 30),
        requestor_name="Jane Doe",
        requestor_org="North Valley EMS",
        requestor_phone="(555) 010-2000",
        facility="Hospital A",
        description="After-hours access for equipment pickup",
        contact="Dr. Amy Foster",
        poc_phone="(555) 010-3000",
    )


@pytest.fixture
def make_request(store, request_fields):
    """Create a request, overriding any of the default fields."""
    def _make(**overrides):
        fields = dict(request_fields)
        fields.update(overrides)
        return store.create_request(**fields)
    return _make


@pytest.fixture
def client(db_session):
    """HTTP client whose endpoints share the test's database session."""
    from foms.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token("user_123", "reviewer@example.org")
    return {"Authorization": f"Bearer {token}"}
