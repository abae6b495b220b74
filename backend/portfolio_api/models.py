# backend/portfolio_api/models.py
from sqlalchemy import Boolean, Column, Date, DateTime, Enum, Integer, JSON, String, Text, func

from .database import Base


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    open_id = Column(String(64), unique=True, index=True, nullable=False)
    name = Column(Text)
    email = Column(String(320))
    login_method = Column(String(64))
    role = Column(Enum("user", "admin", name="user_role"), nullable=False, default="user")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    last_signed_in = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class PersonalInfo(Base):
    """Single-row table; defaults are the owner's built-in profile."""

    __tablename__ = "personal_info"
    id = Column(Integer, primary_key=True, index=True)
    full_name_en = Column(String(255), default="Yasser Sallam")
    full_name_ar = Column(String(255), default="ياسر سلام")
    title_en = Column(String(255), default="Technical Creative & Production Expert")
    title_ar = Column(String(255), default="خبير تقني إبداعي وإنتاجي")
    bio_en = Column(Text)
    bio_ar = Column(Text)
    summary_en = Column(Text)
    summary_ar = Column(Text)
    email = Column(String(320), default="yassersalllam@gmail.com")
    phone = Column(String(50), default="+201000986942")
    whatsapp = Column(String(50), default="+201000986942")
    linkedin_url = Column(String(500), default="https://linkedin.com/in/yasserious")
    location_en = Column(String(255), default="10th of Ramadan City, Egypt")
    location_ar = Column(String(255), default="مدينة العاشر من رمضان، مصر")
    avatar_url = Column(String(500))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Experience(Base):
    __tablename__ = "experiences"
    id = Column(Integer, primary_key=True, index=True)
    company_en = Column(String(255), nullable=False)
    company_ar = Column(String(255))
    position_en = Column(String(255), nullable=False)
    position_ar = Column(String(255))
    location_en = Column(String(255))
    location_ar = Column(String(255))
    description_en = Column(Text)
    description_ar = Column(Text)
    responsibilities_en = Column(JSON)  # list of strings
    responsibilities_ar = Column(JSON)
    start_date = Column(Date)
    end_date = Column(Date)  # None while is_current
    is_current = Column(Boolean, default=False)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Project(Base):
    __tablename__ = "projects"
    id = Column(Integer, primary_key=True, index=True)
    title_en = Column(String(255), nullable=False)
    title_ar = Column(String(255))
    description_en = Column(Text)
    description_ar = Column(Text)
    image_url = Column(String(500))
    category = Column(String(100))
    technologies = Column(JSON)  # list of strings
    project_url = Column(String(500))
    is_featured = Column(Boolean, default=False)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Skill(Base):
    __tablename__ = "skills"
    id = Column(Integer, primary_key=True, index=True)
    name_en = Column(String(255), nullable=False)
    name_ar = Column(String(255))
    category_en = Column(String(100))
    category_ar = Column(String(100))
    proficiency = Column(Integer, default=80)  # 0-100
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Education(Base):
    __tablename__ = "education"
    id = Column(Integer, primary_key=True, index=True)
    institution_en = Column(String(255), nullable=False)
    institution_ar = Column(String(255))
    degree_en = Column(String(255), nullable=False)
    degree_ar = Column(String(255))
    field_en = Column(String(255))
    field_ar = Column(String(255))
    start_date = Column(Date)
    end_date = Column(Date)
    is_current = Column(Boolean, default=False)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Review(Base):
    """Visitor review. Hidden from the public feed until an admin approves it."""

    __tablename__ = "reviews"
    id = Column(Integer, primary_key=True, index=True)
    reviewer_name = Column(String(255), nullable=False)
    reviewer_email = Column(String(320))
    rating = Column(Integer, nullable=False)  # 1-5 stars
    comment = Column(Text, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    is_featured = Column(Boolean, default=False)
    admin_reply = Column(Text)
    replied_at = Column(DateTime(timezone=True))
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Testimonial(Base):
    __tablename__ = "testimonials"
    id = Column(Integer, primary_key=True, index=True)
    name_en = Column(String(255), nullable=False)
    name_ar = Column(String(255))
    title_en = Column(String(255), nullable=False)
    title_ar = Column(String(255))
    company_en = Column(String(255))
    company_ar = Column(String(255))
    content_en = Column(Text, nullable=False)
    content_ar = Column(Text)
    avatar_url = Column(String(500))
    linkedin_url = Column(String(500))
    is_featured = Column(Boolean, default=False)
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)


class Talent(Base):
    __tablename__ = "talents"
    id = Column(Integer, primary_key=True, index=True)
    title_en = Column(String(255), nullable=False)
    title_ar = Column(String(255))
    description_en = Column(Text)
    description_ar = Column(Text)
    icon = Column(String(100))  # icon name resolved by the client
    display_order = Column(Integer, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
