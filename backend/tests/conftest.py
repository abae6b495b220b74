# backend/tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from portfolio_api import security
from portfolio_api.config import Settings
from portfolio_api.database import Database
from portfolio_api.main import create_app

OWNER_OPEN_ID = "owner-open-id"
JWT_SECRET = "test-secret"


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        owner_open_id=OWNER_OPEN_ID,
        jwt_secret=JWT_SECRET,
        cors_origins=["http://testserver"],
    )


@pytest.fixture
def database(settings):
    database = Database(
        settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(settings, database):
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client


def _session_headers(open_id: str, **claims) -> dict:
    token = security.create_session_token(open_id, secret_key=JWT_SECRET, **claims)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def session_headers():
    return _session_headers


@pytest.fixture
def admin_headers():
    return _session_headers(OWNER_OPEN_ID, name="Admin User", email="admin@example.com", login_method="oauth")


@pytest.fixture
def user_headers():
    return _session_headers("visitor-open-id", name="Visitor")
