# backend/tests/test_degraded.py
"""Behaviour when no database is configured."""
import pytest
from fastapi.testclient import TestClient

from portfolio_api.config import Settings
from portfolio_api.database import Database
from portfolio_api.main import create_app


@pytest.fixture
def offline_client():
    settings = Settings(database_url=None, owner_open_id="owner", jwt_secret="test-secret")
    app = create_app(settings=settings, database=Database(None))
    with TestClient(app) as client:
        yield client


def test_database_handle_reports_unavailable():
    database = Database(None)
    assert database.available is False
    assert database.session() is None


def test_health_reports_missing_database(offline_client):
    assert offline_client.get("/health").json() == {"status": "ok", "database": False}


def test_public_reads_degrade_to_empty(offline_client):
    assert offline_client.get("/portfolio/personal-info").json() is None
    assert offline_client.get("/portfolio/experiences").json() == []
    assert offline_client.get("/portfolio/reviews").json() == []
    assert offline_client.get("/portfolio/reviews/stats").json() == {"total": 0, "approved": 0, "average": 0.0}


def test_review_submission_fails_visibly(offline_client):
    response = offline_client.post("/portfolio/reviews", json={
        "reviewer_name": "Omar",
        "rating": 4,
        "comment": "Great precision work on my kitchen cabinets",
    })
    assert response.status_code == 503
    assert response.json() == {"detail": "Database not available"}


def test_invalid_review_still_reports_validation_errors(offline_client):
    response = offline_client.post("/portfolio/reviews", json={"reviewer_name": "O", "rating": 9, "comment": "x"})
    assert response.status_code == 422


def test_admin_routes_require_session_without_database(offline_client):
    assert offline_client.get("/admin/reviews").status_code == 401
