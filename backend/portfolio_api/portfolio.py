# backend/portfolio_api/portfolio.py
import logging
from typing import List, Optional, Type

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from . import crud, schemas
from .database import get_db
from .localization import localize

router = APIRouter()

logger = logging.getLogger(__name__)

LangQuery = Query(None, description="Add fallback-resolved text for this language")


def _present(row, schema: Type[BaseModel], lang: Optional[str]):
    item = schema.model_validate(row)
    if lang:
        item.localized = localize(item.model_dump(exclude={"localized"}), lang)
    return item


def _present_all(rows, schema: Type[BaseModel], lang: Optional[str]) -> list:
    return [_present(row, schema, lang) for row in rows]


@router.get("/personal-info", response_model=Optional[schemas.PersonalInfo])
def get_personal_info(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    info = crud.get_personal_info(db)
    if info is None:
        return None
    return _present(info, schemas.PersonalInfo, lang)


@router.get("/experiences", response_model=List[schemas.Experience])
def get_experiences(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_experiences(db), schemas.Experience, lang)


@router.get("/projects", response_model=List[schemas.Project])
def get_projects(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_projects(db), schemas.Project, lang)


@router.get("/projects/featured", response_model=List[schemas.Project])
def get_featured_projects(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_featured_projects(db), schemas.Project, lang)


@router.get("/skills", response_model=List[schemas.Skill])
def get_skills(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_skills(db), schemas.Skill, lang)


@router.get("/education", response_model=List[schemas.Education])
def get_education(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_education(db), schemas.Education, lang)


@router.get("/testimonials", response_model=List[schemas.Testimonial])
def get_testimonials(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    """Featured testimonials only; the dashboard lists all of them."""
    return _present_all(crud.get_featured_testimonials(db), schemas.Testimonial, lang)


@router.get("/talents", response_model=List[schemas.Talent])
def get_talents(lang: Optional[schemas.Language] = LangQuery, db: Optional[Session] = Depends(get_db)):
    return _present_all(crud.get_talents(db), schemas.Talent, lang)


@router.get("/reviews", response_model=List[schemas.PublicReview])
def get_approved_reviews(db: Optional[Session] = Depends(get_db)):
    return crud.get_approved_reviews(db)


@router.get("/reviews/stats", response_model=schemas.ReviewStats)
def get_review_stats(db: Optional[Session] = Depends(get_db)):
    return crud.get_review_stats(db)


@router.post("/reviews", response_model=schemas.Created, status_code=status.HTTP_201_CREATED)
def submit_review(payload: schemas.ReviewSubmit, db: Optional[Session] = Depends(get_db)):
    """Visitor review submission. Always stored unapproved."""
    review_id = crud.create_review(db, {
        "reviewer_name": payload.reviewer_name,
        "reviewer_email": payload.reviewer_email or None,
        "rating": payload.rating,
        "comment": payload.comment,
        "is_approved": False,
    })
    logger.info("Review %s submitted (rating=%s), awaiting approval", review_id, payload.rating)
    return schemas.Created(id=review_id)
