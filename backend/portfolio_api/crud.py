# backend/portfolio_api/crud.py
"""Persistence access functions, one per entity and operation.

Every function receives the request's session, or ``None`` when the database
is unavailable. Reads degrade to an empty list / ``None`` in that case; writes
raise ``DatabaseUnavailable``.
"""
import datetime
import functools
import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from . import models, schemas
from .database import DatabaseUnavailable
from .localization import parse_string_list

logger = logging.getLogger(__name__)


def _soft_read(default_factory):
    """Return ``default_factory()`` instead of failing when the store is down."""

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(db: Optional[Session], *args, **kwargs):
            if db is None:
                return default_factory()
            try:
                return fn(db, *args, **kwargs)
            except OperationalError as e:
                logger.warning("[Database] %s failed, returning empty result: %s", fn.__name__, e)
                db.rollback()
                return default_factory()
        return wrapper

    return decorator


def _require(db: Optional[Session]) -> Session:
    if db is None:
        raise DatabaseUnavailable()
    return db


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# --- Generic row helpers ---

def _get(db: Session, model, row_id: int):
    return db.query(model).filter(model.id == row_id).first()


def _create(db: Optional[Session], model, data: Dict[str, Any], normalize=None) -> int:
    db = _require(db)
    row = model(**data)
    if normalize is not None:
        normalize(row)
    db.add(row)
    try:
        db.commit()
    except Exception:
        logger.exception("[Database] Failed to insert into %s", model.__tablename__)
        db.rollback()
        raise
    db.refresh(row)
    return row.id


def _update(db: Optional[Session], model, row_id: int, data: Dict[str, Any], normalize=None):
    db = _require(db)
    row = _get(db, model, row_id)
    if row is None:
        return None
    for field, value in data.items():
        if hasattr(row, field):
            setattr(row, field, value)
    if normalize is not None:
        normalize(row)
    try:
        db.commit()
    except Exception:
        logger.exception("[Database] Failed to update %s id=%s", model.__tablename__, row_id)
        db.rollback()
        raise
    db.refresh(row)
    return row


def _delete(db: Optional[Session], model, row_id: int) -> bool:
    db = _require(db)
    row = _get(db, model, row_id)
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True


def _clear_end_date_when_current(row) -> None:
    # An ongoing entry has no end date, whichever fields the write touched
    if row.is_current:
        row.end_date = None


# ============ USERS ============

def upsert_user(db: Optional[Session], user: schemas.UserUpsert, owner_open_id: Optional[str] = None) -> models.User:
    """Create or update the user keyed by ``open_id``.

    Only fields that were explicitly set on ``user`` are written. The role is
    written when given; otherwise the configured owner identity is promoted to
    admin. This is the only place a role is ever granted automatically.
    """
    if not user.open_id:
        raise ValueError("User open_id is required for upsert")
    db = _require(db)

    values = user.model_dump(exclude_unset=True, exclude={"open_id"})
    if values.get("role") is None:
        values.pop("role", None)
        if owner_open_id and user.open_id == owner_open_id:
            values["role"] = "admin"
    if not values.get("last_signed_in"):
        values["last_signed_in"] = _utcnow()

    query = db.query(models.User).filter(models.User.open_id == user.open_id)
    db_user = query.first()
    if db_user is None:
        db_user = models.User(open_id=user.open_id, **values)
        db.add(db_user)
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request inserted the same open_id first; update that row instead
            db.rollback()
            logger.info("[Database] User %s was created concurrently, updating it", user.open_id)
            db_user = query.first()
            if db_user is None:
                raise
        else:
            db.refresh(db_user)
            return db_user

    for field, value in values.items():
        setattr(db_user, field, value)
    try:
        db.commit()
    except Exception:
        logger.exception("[Database] Failed to upsert user %s", user.open_id)
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


@_soft_read(lambda: None)
def get_user_by_open_id(db: Session, open_id: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.open_id == open_id).first()


# ============ PERSONAL INFO ============

@_soft_read(lambda: None)
def get_personal_info(db: Session) -> Optional[models.PersonalInfo]:
    return db.query(models.PersonalInfo).order_by(models.PersonalInfo.id.asc()).first()


def upsert_personal_info(db: Optional[Session], data: Dict[str, Any]) -> models.PersonalInfo:
    db = _require(db)
    existing = db.query(models.PersonalInfo).order_by(models.PersonalInfo.id.asc()).first()
    if existing is not None:
        return _update(db, models.PersonalInfo, existing.id, data)
    new_id = _create(db, models.PersonalInfo, data)
    return _get(db, models.PersonalInfo, new_id)


# ============ EXPERIENCES ============

@_soft_read(list)
def get_experiences(db: Session) -> List[models.Experience]:
    return db.query(models.Experience).order_by(
        models.Experience.display_order.asc(),
        models.Experience.start_date.desc(),
        models.Experience.id.desc(),
    ).all()


@_soft_read(lambda: None)
def get_experience_by_id(db: Session, experience_id: int) -> Optional[models.Experience]:
    return _get(db, models.Experience, experience_id)


def create_experience(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Experience, data, normalize=_clear_end_date_when_current)


def update_experience(db: Optional[Session], experience_id: int, data: Dict[str, Any]) -> Optional[models.Experience]:
    return _update(db, models.Experience, experience_id, data, normalize=_clear_end_date_when_current)


def delete_experience(db: Optional[Session], experience_id: int) -> bool:
    return _delete(db, models.Experience, experience_id)


# ============ PROJECTS ============

@_soft_read(list)
def get_projects(db: Session) -> List[models.Project]:
    return db.query(models.Project).order_by(
        models.Project.display_order.asc(),
        models.Project.created_at.desc(),
        models.Project.id.desc(),
    ).all()


@_soft_read(list)
def get_featured_projects(db: Session) -> List[models.Project]:
    return db.query(models.Project).filter(models.Project.is_featured.is_(True)).order_by(
        models.Project.display_order.asc(),
        models.Project.id.asc(),
    ).all()


@_soft_read(lambda: None)
def get_project_by_id(db: Session, project_id: int) -> Optional[models.Project]:
    return _get(db, models.Project, project_id)


def create_project(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Project, data)


def update_project(db: Optional[Session], project_id: int, data: Dict[str, Any]) -> Optional[models.Project]:
    return _update(db, models.Project, project_id, data)


def delete_project(db: Optional[Session], project_id: int) -> bool:
    return _delete(db, models.Project, project_id)


# ============ SKILLS ============

@_soft_read(list)
def get_skills(db: Session) -> List[models.Skill]:
    return db.query(models.Skill).order_by(models.Skill.display_order.asc(), models.Skill.id.asc()).all()


@_soft_read(lambda: None)
def get_skill_by_id(db: Session, skill_id: int) -> Optional[models.Skill]:
    return _get(db, models.Skill, skill_id)


def create_skill(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Skill, data)


def update_skill(db: Optional[Session], skill_id: int, data: Dict[str, Any]) -> Optional[models.Skill]:
    return _update(db, models.Skill, skill_id, data)


def delete_skill(db: Optional[Session], skill_id: int) -> bool:
    return _delete(db, models.Skill, skill_id)


# ============ EDUCATION ============

@_soft_read(list)
def get_education(db: Session) -> List[models.Education]:
    return db.query(models.Education).order_by(
        models.Education.display_order.asc(),
        models.Education.start_date.desc(),
        models.Education.id.desc(),
    ).all()


@_soft_read(lambda: None)
def get_education_by_id(db: Session, education_id: int) -> Optional[models.Education]:
    return _get(db, models.Education, education_id)


def create_education(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Education, data, normalize=_clear_end_date_when_current)


def update_education(db: Optional[Session], education_id: int, data: Dict[str, Any]) -> Optional[models.Education]:
    return _update(db, models.Education, education_id, data, normalize=_clear_end_date_when_current)


def delete_education(db: Optional[Session], education_id: int) -> bool:
    return _delete(db, models.Education, education_id)


# ============ REVIEWS ============

@_soft_read(list)
def get_approved_reviews(db: Session) -> List[models.Review]:
    return db.query(models.Review).filter(models.Review.is_approved.is_(True)).order_by(
        models.Review.display_order.asc(),
        models.Review.created_at.desc(),
        models.Review.id.desc(),
    ).all()


@_soft_read(list)
def get_all_reviews(db: Session) -> List[models.Review]:
    return db.query(models.Review).order_by(
        models.Review.display_order.asc(),
        models.Review.created_at.desc(),
        models.Review.id.desc(),
    ).all()


@_soft_read(lambda: None)
def get_review_by_id(db: Session, review_id: int) -> Optional[models.Review]:
    return _get(db, models.Review, review_id)


def create_review(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Review, data)


def update_review(db: Optional[Session], review_id: int, data: Dict[str, Any]) -> Optional[models.Review]:
    return _update(db, models.Review, review_id, data)


def delete_review(db: Optional[Session], review_id: int) -> bool:
    return _delete(db, models.Review, review_id)


def approve_review(db: Optional[Session], review_id: int, approved: bool) -> Optional[models.Review]:
    return _update(db, models.Review, review_id, {"is_approved": approved})


def reply_to_review(db: Optional[Session], review_id: int, reply: str) -> Optional[models.Review]:
    return _update(db, models.Review, review_id, {"admin_reply": reply, "replied_at": _utcnow()})


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


@_soft_read(lambda: {"total": 0, "approved": 0, "average": 0.0})
def get_review_stats(db: Session) -> Dict[str, Any]:
    # Whole table is loaded; review volume is expected to stay small.
    all_reviews = db.query(models.Review).all()
    approved_reviews = [r for r in all_reviews if r.is_approved]

    total = len(all_reviews)
    approved = len(approved_reviews)
    average = sum(r.rating for r in approved_reviews) / approved if approved else 0.0
    return {"total": total, "approved": approved, "average": _round_half_up(average)}


# ============ TESTIMONIALS ============

@_soft_read(list)
def get_testimonials(db: Session) -> List[models.Testimonial]:
    return db.query(models.Testimonial).order_by(
        models.Testimonial.display_order.asc(),
        models.Testimonial.created_at.desc(),
        models.Testimonial.id.desc(),
    ).all()


@_soft_read(list)
def get_featured_testimonials(db: Session) -> List[models.Testimonial]:
    return db.query(models.Testimonial).filter(models.Testimonial.is_featured.is_(True)).order_by(
        models.Testimonial.display_order.asc(),
        models.Testimonial.id.asc(),
    ).all()


@_soft_read(lambda: None)
def get_testimonial_by_id(db: Session, testimonial_id: int) -> Optional[models.Testimonial]:
    return _get(db, models.Testimonial, testimonial_id)


def create_testimonial(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Testimonial, data)


def update_testimonial(db: Optional[Session], testimonial_id: int, data: Dict[str, Any]) -> Optional[models.Testimonial]:
    return _update(db, models.Testimonial, testimonial_id, data)


def delete_testimonial(db: Optional[Session], testimonial_id: int) -> bool:
    return _delete(db, models.Testimonial, testimonial_id)


# ============ TALENTS ============

@_soft_read(list)
def get_talents(db: Session) -> List[models.Talent]:
    return db.query(models.Talent).order_by(models.Talent.display_order.asc(), models.Talent.id.asc()).all()


@_soft_read(lambda: None)
def get_talent_by_id(db: Session, talent_id: int) -> Optional[models.Talent]:
    return _get(db, models.Talent, talent_id)


def create_talent(db: Optional[Session], data: Dict[str, Any]) -> int:
    return _create(db, models.Talent, data)


def update_talent(db: Optional[Session], talent_id: int, data: Dict[str, Any]) -> Optional[models.Talent]:
    return _update(db, models.Talent, talent_id, data)


def delete_talent(db: Optional[Session], talent_id: int) -> bool:
    return _delete(db, models.Talent, talent_id)


# ============ MAINTENANCE ============

LIST_COLUMNS = (
    (models.Experience, ("responsibilities_en", "responsibilities_ar")),
    (models.Project, ("technologies",)),
)


def migrate_legacy_list_columns(db: Optional[Session]) -> int:
    """Convert list columns still holding JSON-encoded text into native lists.

    Malformed values become an empty list. Returns the number of rows changed.
    """
    db = _require(db)
    changed = 0
    for model, columns in LIST_COLUMNS:
        for row in db.query(model).all():
            dirty = False
            for column in columns:
                value = getattr(row, column)
                if isinstance(value, str):
                    setattr(row, column, parse_string_list(value))
                    dirty = True
            if dirty:
                changed += 1
    if changed:
        db.commit()
        logger.info("Migrated %d rows with JSON-encoded list columns", changed)
    return changed
