# backend/portfolio_api/admin.py
"""Dashboard procedures. Every route here requires an admin session."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .database import get_db
from .dependencies import require_admin

router = APIRouter(dependencies=[Depends(require_admin)])

logger = logging.getLogger(__name__)


def _invalidate(response: Response, *procedures: str):
    # Tells the client which public reads are now stale
    response.headers["X-Invalidate"] = ",".join(procedures)


def _found_or_404(result, entity: str):
    if not result:
        raise HTTPException(status_code=404, detail=f"{entity} not found")
    return result


# --- Personal info ---

@router.put("/personal-info", response_model=schemas.Success)
def update_personal_info(
    payload: schemas.PersonalInfoUpdate,
    response: Response,
    db: Optional[Session] = Depends(get_db),
    admin: models.User = Depends(require_admin),
):
    crud.upsert_personal_info(db, payload.changes())
    logger.info("Personal info updated by %s", admin.open_id)
    _invalidate(response, "portfolio.getPersonalInfo")
    return schemas.Success()


# --- Experiences ---

@router.get("/experiences", response_model=List[schemas.Experience])
def get_experiences(db: Optional[Session] = Depends(get_db)):
    return crud.get_experiences(db)


@router.post("/experiences", response_model=schemas.Created, status_code=201)
def create_experience(payload: schemas.ExperienceCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_experience(db, payload.model_dump(exclude_none=True))
    logger.info("Experience %s created", new_id)
    _invalidate(response, "portfolio.getExperiences")
    return schemas.Created(id=new_id)


@router.patch("/experiences/{experience_id}", response_model=schemas.Success)
def update_experience(
    experience_id: int,
    payload: schemas.ExperienceUpdate,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.update_experience(db, experience_id, payload.changes()), "Experience")
    _invalidate(response, "portfolio.getExperiences")
    return schemas.Success()


@router.delete("/experiences/{experience_id}", response_model=schemas.Success)
def delete_experience(experience_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_experience(db, experience_id), "Experience")
    logger.info("Experience %s deleted", experience_id)
    _invalidate(response, "portfolio.getExperiences")
    return schemas.Success()


# --- Projects ---

@router.get("/projects", response_model=List[schemas.Project])
def get_projects(db: Optional[Session] = Depends(get_db)):
    return crud.get_projects(db)


@router.post("/projects", response_model=schemas.Created, status_code=201)
def create_project(payload: schemas.ProjectCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_project(db, payload.model_dump(exclude_none=True))
    logger.info("Project %s created", new_id)
    _invalidate(response, "portfolio.getProjects", "portfolio.getFeaturedProjects")
    return schemas.Created(id=new_id)


@router.patch("/projects/{project_id}", response_model=schemas.Success)
def update_project(
    project_id: int,
    payload: schemas.ProjectUpdate,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.update_project(db, project_id, payload.changes()), "Project")
    _invalidate(response, "portfolio.getProjects", "portfolio.getFeaturedProjects")
    return schemas.Success()


@router.delete("/projects/{project_id}", response_model=schemas.Success)
def delete_project(project_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_project(db, project_id), "Project")
    logger.info("Project %s deleted", project_id)
    _invalidate(response, "portfolio.getProjects", "portfolio.getFeaturedProjects")
    return schemas.Success()


# --- Skills ---

@router.get("/skills", response_model=List[schemas.Skill])
def get_skills(db: Optional[Session] = Depends(get_db)):
    return crud.get_skills(db)


@router.post("/skills", response_model=schemas.Created, status_code=201)
def create_skill(payload: schemas.SkillCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_skill(db, payload.model_dump(exclude_none=True))
    logger.info("Skill %s created", new_id)
    _invalidate(response, "portfolio.getSkills")
    return schemas.Created(id=new_id)


@router.patch("/skills/{skill_id}", response_model=schemas.Success)
def update_skill(skill_id: int, payload: schemas.SkillUpdate, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.update_skill(db, skill_id, payload.changes()), "Skill")
    _invalidate(response, "portfolio.getSkills")
    return schemas.Success()


@router.delete("/skills/{skill_id}", response_model=schemas.Success)
def delete_skill(skill_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_skill(db, skill_id), "Skill")
    logger.info("Skill %s deleted", skill_id)
    _invalidate(response, "portfolio.getSkills")
    return schemas.Success()


# --- Education ---

@router.get("/education", response_model=List[schemas.Education])
def get_education(db: Optional[Session] = Depends(get_db)):
    return crud.get_education(db)


@router.post("/education", response_model=schemas.Created, status_code=201)
def create_education(payload: schemas.EducationCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_education(db, payload.model_dump(exclude_none=True))
    logger.info("Education entry %s created", new_id)
    _invalidate(response, "portfolio.getEducation")
    return schemas.Created(id=new_id)


@router.patch("/education/{education_id}", response_model=schemas.Success)
def update_education(
    education_id: int,
    payload: schemas.EducationUpdate,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.update_education(db, education_id, payload.changes()), "Education entry")
    _invalidate(response, "portfolio.getEducation")
    return schemas.Success()


@router.delete("/education/{education_id}", response_model=schemas.Success)
def delete_education(education_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_education(db, education_id), "Education entry")
    logger.info("Education entry %s deleted", education_id)
    _invalidate(response, "portfolio.getEducation")
    return schemas.Success()


# --- Reviews ---

@router.get("/reviews", response_model=List[schemas.Review])
def get_all_reviews(db: Optional[Session] = Depends(get_db)):
    return crud.get_all_reviews(db)


@router.post("/reviews/{review_id}/approve", response_model=schemas.Success)
def approve_review(
    review_id: int,
    payload: schemas.ReviewApproval,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.approve_review(db, review_id, payload.approved), "Review")
    logger.info("Review %s %s", review_id, "approved" if payload.approved else "hidden")
    _invalidate(response, "portfolio.getApprovedReviews", "portfolio.getReviewStats")
    return schemas.Success()


@router.post("/reviews/{review_id}/reply", response_model=schemas.Success)
def reply_to_review(
    review_id: int,
    payload: schemas.ReviewReply,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.reply_to_review(db, review_id, payload.reply), "Review")
    _invalidate(response, "portfolio.getApprovedReviews")
    return schemas.Success()


@router.delete("/reviews/{review_id}", response_model=schemas.Success)
def delete_review(review_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_review(db, review_id), "Review")
    logger.info("Review %s deleted", review_id)
    _invalidate(response, "portfolio.getApprovedReviews", "portfolio.getReviewStats")
    return schemas.Success()


# --- Testimonials ---

@router.get("/testimonials", response_model=List[schemas.Testimonial])
def get_testimonials(db: Optional[Session] = Depends(get_db)):
    return crud.get_testimonials(db)


@router.post("/testimonials", response_model=schemas.Created, status_code=201)
def create_testimonial(payload: schemas.TestimonialCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_testimonial(db, payload.model_dump(exclude_none=True))
    logger.info("Testimonial %s created", new_id)
    _invalidate(response, "portfolio.getTestimonials")
    return schemas.Created(id=new_id)


@router.patch("/testimonials/{testimonial_id}", response_model=schemas.Success)
def update_testimonial(
    testimonial_id: int,
    payload: schemas.TestimonialUpdate,
    response: Response,
    db: Optional[Session] = Depends(get_db),
):
    _found_or_404(crud.update_testimonial(db, testimonial_id, payload.changes()), "Testimonial")
    _invalidate(response, "portfolio.getTestimonials")
    return schemas.Success()


@router.delete("/testimonials/{testimonial_id}", response_model=schemas.Success)
def delete_testimonial(testimonial_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_testimonial(db, testimonial_id), "Testimonial")
    logger.info("Testimonial %s deleted", testimonial_id)
    _invalidate(response, "portfolio.getTestimonials")
    return schemas.Success()


# --- Talents ---

@router.get("/talents", response_model=List[schemas.Talent])
def get_talents(db: Optional[Session] = Depends(get_db)):
    return crud.get_talents(db)


@router.post("/talents", response_model=schemas.Created, status_code=201)
def create_talent(payload: schemas.TalentCreate, response: Response, db: Optional[Session] = Depends(get_db)):
    new_id = crud.create_talent(db, payload.model_dump(exclude_none=True))
    logger.info("Talent %s created", new_id)
    _invalidate(response, "portfolio.getTalents")
    return schemas.Created(id=new_id)


@router.patch("/talents/{talent_id}", response_model=schemas.Success)
def update_talent(talent_id: int, payload: schemas.TalentUpdate, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.update_talent(db, talent_id, payload.changes()), "Talent")
    _invalidate(response, "portfolio.getTalents")
    return schemas.Success()


@router.delete("/talents/{talent_id}", response_model=schemas.Success)
def delete_talent(talent_id: int, response: Response, db: Optional[Session] = Depends(get_db)):
    _found_or_404(crud.delete_talent(db, talent_id), "Talent")
    logger.info("Talent %s deleted", talent_id)
    _invalidate(response, "portfolio.getTalents")
    return schemas.Success()
