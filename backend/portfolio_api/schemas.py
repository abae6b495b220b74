# backend/portfolio_api/schemas.py
import json
from datetime import date, datetime
from typing import Any, ClassVar, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from .localization import parse_string_list

Language = Literal["en", "ar"]


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_string_list(value: Any) -> Any:
    # Dashboard forms post JSON arrays as text; accept both shapes.
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            raise ValueError("must be a list of strings or a JSON-encoded array")
        return decoded
    return value


# --- Shared base classes ---

class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class Localized(OrmModel):
    # Filled in by public endpoints when a ?lang= is requested
    localized: Optional[Dict[str, Any]] = None


class PartialUpdate(BaseModel):
    """Partial update payload: only fields that were sent are applied.

    Columns listed in ``non_nullable`` may be omitted but not set to null.
    """

    model_config = ConfigDict(extra="forbid")
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in self.non_nullable:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class DatedEntry(BaseModel):
    @field_validator("start_date", "end_date", mode="before", check_fields=False)
    @classmethod
    def empty_date_to_none(cls, value):
        return _blank_to_none(value)


# --- Users / auth ---

class UserUpsert(BaseModel):
    """Identity sync payload. Unset fields are left untouched on update."""

    open_id: str = Field(..., min_length=1, max_length=64)
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    role: Optional[Literal["user", "admin"]] = None
    last_signed_in: Optional[datetime] = None


class User(OrmModel):
    id: int
    open_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    login_method: Optional[str] = None
    role: Literal["user", "admin"]
    created_at: datetime
    updated_at: datetime
    last_signed_in: datetime


class Success(BaseModel):
    success: bool = True


class Created(Success):
    id: int


# --- Personal info ---

class PersonalInfoUpdate(PartialUpdate):
    full_name_en: Optional[str] = Field(default=None, max_length=255)
    full_name_ar: Optional[str] = Field(default=None, max_length=255)
    title_en: Optional[str] = Field(default=None, max_length=255)
    title_ar: Optional[str] = Field(default=None, max_length=255)
    bio_en: Optional[str] = None
    bio_ar: Optional[str] = None
    summary_en: Optional[str] = None
    summary_ar: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    whatsapp: Optional[str] = Field(default=None, max_length=50)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    location_en: Optional[str] = Field(default=None, max_length=255)
    location_ar: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = Field(default=None, max_length=500)


class PersonalInfo(Localized):
    id: int
    full_name_en: Optional[str] = None
    full_name_ar: Optional[str] = None
    title_en: Optional[str] = None
    title_ar: Optional[str] = None
    bio_en: Optional[str] = None
    bio_ar: Optional[str] = None
    summary_en: Optional[str] = None
    summary_ar: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    linkedin_url: Optional[str] = None
    location_en: Optional[str] = None
    location_ar: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# --- Experiences ---

class ExperienceFields(DatedEntry):
    company_ar: Optional[str] = Field(default=None, max_length=255)
    position_ar: Optional[str] = Field(default=None, max_length=255)
    location_en: Optional[str] = Field(default=None, max_length=255)
    location_ar: Optional[str] = Field(default=None, max_length=255)
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    responsibilities_en: Optional[List[str]] = None
    responsibilities_ar: Optional[List[str]] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None
    display_order: Optional[int] = None

    @field_validator("responsibilities_en", "responsibilities_ar", mode="before")
    @classmethod
    def parse_responsibilities(cls, value):
        return _coerce_string_list(value)


class ExperienceCreate(ExperienceFields):
    company_en: str = Field(..., min_length=1, max_length=255)
    position_en: str = Field(..., min_length=1, max_length=255)


class ExperienceUpdate(ExperienceFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("company_en", "position_en", "is_current", "display_order")

    company_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position_en: Optional[str] = Field(default=None, min_length=1, max_length=255)


class Experience(Localized):
    id: int
    company_en: str
    company_ar: Optional[str] = None
    position_en: str
    position_ar: Optional[str] = None
    location_en: Optional[str] = None
    location_ar: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    responsibilities_en: List[str] = []
    responsibilities_ar: List[str] = []
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    display_order: int = 0
    created_at: datetime
    updated_at: datetime

    @field_validator("responsibilities_en", "responsibilities_ar", mode="before")
    @classmethod
    def stored_list(cls, value):
        return parse_string_list(value)

    @field_validator("is_current", mode="before")
    @classmethod
    def flag_default(cls, value):
        return bool(value)

    @field_validator("display_order", mode="before")
    @classmethod
    def order_default(cls, value):
        return value or 0


# --- Projects ---

class ProjectFields(BaseModel):
    title_ar: Optional[str] = Field(default=None, max_length=255)
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    image_url: Optional[str] = Field(default=None, max_length=500)
    category: Optional[str] = Field(default=None, max_length=100)
    technologies: Optional[List[str]] = None
    project_url: Optional[str] = Field(default=None, max_length=500)
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None

    @field_validator("technologies", mode="before")
    @classmethod
    def parse_technologies(cls, value):
        return _coerce_string_list(value)


class ProjectCreate(ProjectFields):
    title_en: str = Field(..., min_length=1, max_length=255)


class ProjectUpdate(ProjectFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title_en", "is_featured", "display_order")

    title_en: Optional[str] = Field(default=None, min_length=1, max_length=255)


class Project(Localized):
    id: int
    title_en: str
    title_ar: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    technologies: List[str] = []
    project_url: Optional[str] = None
    is_featured: bool = False
    display_order: int = 0
    created_at: datetime
    updated_at: datetime

    @field_validator("technologies", mode="before")
    @classmethod
    def stored_list(cls, value):
        return parse_string_list(value)

    @field_validator("is_featured", mode="before")
    @classmethod
    def flag_default(cls, value):
        return bool(value)

    @field_validator("display_order", mode="before")
    @classmethod
    def order_default(cls, value):
        return value or 0


# --- Skills ---

class SkillFields(BaseModel):
    name_ar: Optional[str] = Field(default=None, max_length=255)
    category_en: Optional[str] = Field(default=None, max_length=100)
    category_ar: Optional[str] = Field(default=None, max_length=100)
    proficiency: Optional[int] = Field(default=None, ge=0, le=100)
    display_order: Optional[int] = None


class SkillCreate(SkillFields):
    name_en: str = Field(..., min_length=1, max_length=255)


class SkillUpdate(SkillFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name_en", "proficiency", "display_order")

    name_en: Optional[str] = Field(default=None, min_length=1, max_length=255)


class Skill(Localized):
    id: int
    name_en: str
    name_ar: Optional[str] = None
    category_en: Optional[str] = None
    category_ar: Optional[str] = None
    proficiency: int = 80
    display_order: int = 0
    created_at: datetime
    updated_at: datetime


# --- Education ---

class EducationFields(DatedEntry):
    institution_ar: Optional[str] = Field(default=None, max_length=255)
    degree_ar: Optional[str] = Field(default=None, max_length=255)
    field_en: Optional[str] = Field(default=None, max_length=255)
    field_ar: Optional[str] = Field(default=None, max_length=255)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None
    display_order: Optional[int] = None


class EducationCreate(EducationFields):
    institution_en: str = Field(..., min_length=1, max_length=255)
    degree_en: str = Field(..., min_length=1, max_length=255)


class EducationUpdate(EducationFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("institution_en", "degree_en", "is_current", "display_order")

    institution_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    degree_en: Optional[str] = Field(default=None, min_length=1, max_length=255)


class Education(Localized):
    id: int
    institution_en: str
    institution_ar: Optional[str] = None
    degree_en: str
    degree_ar: Optional[str] = None
    field_en: Optional[str] = None
    field_ar: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    display_order: int = 0
    created_at: datetime
    updated_at: datetime

    @field_validator("is_current", mode="before")
    @classmethod
    def flag_default(cls, value):
        return bool(value)


# --- Reviews ---

class ReviewSubmit(BaseModel):
    reviewer_name: str = Field(..., min_length=2, max_length=255)
    reviewer_email: Optional[EmailStr] = None
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=1000)

    @field_validator("reviewer_email", mode="before")
    @classmethod
    def empty_email_to_none(cls, value):
        return _blank_to_none(value)


class ReviewApproval(BaseModel):
    approved: bool


class ReviewReply(BaseModel):
    reply: str = Field(..., min_length=1, max_length=2000)


class Review(OrmModel):
    id: int
    reviewer_name: str
    reviewer_email: Optional[str] = None
    rating: int
    comment: str
    is_approved: bool
    is_featured: bool = False
    admin_reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    display_order: int = 0
    created_at: datetime
    updated_at: datetime


class PublicReview(OrmModel):
    # Visitor emails stay private
    id: int
    reviewer_name: str
    rating: int
    comment: str
    admin_reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    created_at: datetime


class ReviewStats(BaseModel):
    total: int
    approved: int
    average: float


# --- Testimonials ---

class TestimonialFields(BaseModel):
    name_ar: Optional[str] = Field(default=None, max_length=255)
    title_ar: Optional[str] = Field(default=None, max_length=255)
    company_en: Optional[str] = Field(default=None, max_length=255)
    company_ar: Optional[str] = Field(default=None, max_length=255)
    content_ar: Optional[str] = None
    avatar_url: Optional[str] = Field(default=None, max_length=500)
    linkedin_url: Optional[str] = Field(default=None, max_length=500)
    is_featured: Optional[bool] = None
    display_order: Optional[int] = None


class TestimonialCreate(TestimonialFields):
    name_en: str = Field(..., min_length=1, max_length=255)
    title_en: str = Field(..., min_length=1, max_length=255)
    content_en: str = Field(..., min_length=1)


class TestimonialUpdate(TestimonialFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("name_en", "title_en", "content_en", "is_featured", "display_order")

    name_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    title_en: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content_en: Optional[str] = Field(default=None, min_length=1)


class Testimonial(Localized):
    id: int
    name_en: str
    name_ar: Optional[str] = None
    title_en: str
    title_ar: Optional[str] = None
    company_en: Optional[str] = None
    company_ar: Optional[str] = None
    content_en: str
    content_ar: Optional[str] = None
    avatar_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    is_featured: bool = False
    display_order: int = 0
    created_at: datetime
    updated_at: datetime


# --- Talents ---

class TalentFields(BaseModel):
    title_ar: Optional[str] = Field(default=None, max_length=255)
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=100)
    display_order: Optional[int] = None


class TalentCreate(TalentFields):
    title_en: str = Field(..., min_length=1, max_length=255)


class TalentUpdate(TalentFields, PartialUpdate):
    non_nullable: ClassVar[Tuple[str, ...]] = ("title_en", "display_order")

    title_en: Optional[str] = Field(default=None, min_length=1, max_length=255)


class Talent(Localized):
    id: int
    title_en: str
    title_ar: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    icon: Optional[str] = None
    display_order: int = 0
    created_at: datetime
    updated_at: datetime
