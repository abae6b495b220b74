# backend/tests/test_auth.py
from datetime import timedelta

from sqlalchemy.exc import OperationalError

from portfolio_api import crud, models, security


def test_me_returns_null_for_anonymous(client):
    response = client.get("/auth/me")
    assert response.status_code == 200
    assert response.json() is None


def test_me_returns_owner_as_admin(client, admin_headers, settings):
    body = client.get("/auth/me", headers=admin_headers).json()
    assert body["open_id"] == settings.owner_open_id
    assert body["name"] == "Admin User"
    assert body["email"] == "admin@example.com"
    assert body["role"] == "admin"
    assert body["last_signed_in"] is not None


def test_me_returns_regular_user(client, user_headers):
    body = client.get("/auth/me", headers=user_headers).json()
    assert body["role"] == "user"
    assert body["name"] == "Visitor"


def test_repeated_sessions_reuse_user_row(client, db, user_headers):
    first = client.get("/auth/me", headers=user_headers).json()
    second = client.get("/auth/me", headers=user_headers).json()
    assert first["id"] == second["id"]
    assert db.query(models.User).count() == 1


def test_session_cookie_is_accepted(client, settings):
    token = security.create_session_token(settings.owner_open_id, secret_key=settings.jwt_secret)
    client.cookies.set(settings.session_cookie_name, token)
    assert client.get("/auth/me").json()["role"] == "admin"


def test_token_signed_with_other_secret_is_anonymous(client, settings):
    token = security.create_session_token(settings.owner_open_id, secret_key="other-secret")
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.json() is None


def test_expired_token_is_anonymous(client, settings):
    token = security.create_session_token(
        settings.owner_open_id, secret_key=settings.jwt_secret, expires_delta=timedelta(seconds=-5)
    )
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.json() is None


def test_logout_clears_session_cookie(client, admin_headers, settings):
    response = client.post("/auth/logout", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{settings.session_cookie_name}=")
    assert "Max-Age=0" in set_cookie


def test_decode_round_trip_keeps_claims():
    token = security.create_session_token("abc", name="Omar", login_method="oauth", secret_key="s3cret")
    claims = security.decode_session_token(token, secret_key="s3cret")
    assert claims["sub"] == "abc"
    assert claims["name"] == "Omar"
    assert claims["login_method"] == "oauth"
    assert "email" not in claims


def test_unreachable_database_during_session_sync_is_503(client, admin_headers, monkeypatch):
    def unreachable(*args, **kwargs):
        raise OperationalError("SELECT users", {}, Exception("connection refused"))

    monkeypatch.setattr(crud, "upsert_user", unreachable)

    response = client.get("/auth/me", headers=admin_headers)
    assert response.status_code == 503
    assert response.json() == {"detail": "Database not available"}
    assert client.get("/admin/reviews", headers=admin_headers).status_code == 503
