# backend/portfolio_api/dependencies.py
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from jose import JWTError
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from . import crud, models, schemas, security
from .config import Settings
from .database import DatabaseUnavailable, get_db

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _session_token(request: Request, settings: Settings) -> Optional[str]:
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    authorization = request.headers.get("Authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization.split(" ", 1)[1].strip() or None
    return None


def get_optional_user(
    request: Request,
    db: Optional[Session] = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Optional[models.User]:
    """Resolve the caller from the session token, or None for anonymous visitors.

    A valid session syncs the identity row (last sign-in, profile claims, owner
    promotion) before it is returned.
    """
    token = _session_token(request, settings)
    if not token:
        return None
    try:
        payload = security.decode_session_token(token, secret_key=settings.jwt_secret)
    except JWTError:
        return None
    open_id = payload.get("sub")
    if not open_id:
        return None
    if db is None:
        logger.warning("[Auth] Cannot resolve session user: database not available")
        return None

    claims = {key: payload[key] for key in ("name", "email", "login_method") if key in payload}
    sync = schemas.UserUpsert(open_id=open_id, last_signed_in=datetime.now(timezone.utc), **claims)
    try:
        return crud.upsert_user(db, sync, owner_open_id=settings.owner_open_id)
    except OperationalError as e:
        logger.warning("[Auth] Cannot sync session user %s: %s", open_id, e)
        db.rollback()
        raise DatabaseUnavailable() from e


def get_current_user(user: Optional[models.User] = Depends(get_optional_user)) -> models.User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please login (10001)",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(user: models.User = Depends(get_current_user)) -> models.User:
    if user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
