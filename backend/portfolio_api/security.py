# backend/portfolio_api/security.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from .config import get_settings

ALGORITHM = "HS256"


def create_session_token(
    open_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    login_method: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    """Sign a session token for ``open_id``.

    The identity provider issues these after login; the profile claims are
    copied onto the user row when the session is first seen.
    """
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.session_ttl_days))
    to_encode: Dict[str, Any] = {"sub": open_id, "exp": expire}
    if name is not None:
        to_encode["name"] = name
    if email is not None:
        to_encode["email"] = email
    if login_method is not None:
        to_encode["login_method"] = login_method
    return jwt.encode(to_encode, secret_key or settings.jwt_secret, algorithm=ALGORITHM)


def decode_session_token(token: str, secret_key: Optional[str] = None) -> Dict[str, Any]:
    """Return the token claims; raises ``JWTError`` if invalid or expired."""
    return jwt.decode(token, secret_key or get_settings().jwt_secret, algorithms=[ALGORITHM])
