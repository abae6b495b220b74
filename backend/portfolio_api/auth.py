# backend/portfolio_api/auth.py
from typing import Optional

from fastapi import APIRouter, Depends, Response

from . import models, schemas
from .config import Settings
from .dependencies import get_app_settings, get_optional_user

router = APIRouter()


@router.get("/me", response_model=Optional[schemas.User])
def me(user: Optional[models.User] = Depends(get_optional_user)):
    return user


@router.post("/logout", response_model=schemas.Success)
def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    response.delete_cookie(settings.session_cookie_name, path="/", httponly=True, samesite="none", secure=True)
    return schemas.Success()
