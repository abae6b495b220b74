# backend/tests/test_portfolio.py
import datetime

import pytest

from portfolio_api import crud, models

VALID_REVIEW = {
    "reviewer_name": "Omar",
    "rating": 4,
    "comment": "Great precision work on my kitchen cabinets",
}


def test_empty_database_returns_empty_content(client):
    assert client.get("/portfolio/personal-info").json() is None
    for path in ("experiences", "projects", "projects/featured", "skills", "education",
                 "testimonials", "talents", "reviews"):
        response = client.get(f"/portfolio/{path}")
        assert response.status_code == 200
        assert response.json() == []
    assert client.get("/portfolio/reviews/stats").json() == {"total": 0, "approved": 0, "average": 0.0}


def test_submit_review_creates_unapproved_row(client, db):
    response = client.post("/portfolio/reviews", json=VALID_REVIEW)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["id"] > 0

    review = db.query(models.Review).filter(models.Review.id == body["id"]).one()
    assert review.is_approved is False
    assert review.reviewer_email is None
    assert db.query(models.Review).count() == 1


def test_submit_review_ignores_approval_flag_from_visitor(client, db):
    response = client.post("/portfolio/reviews", json={**VALID_REVIEW, "is_approved": True})
    assert response.status_code == 201
    assert client.get("/portfolio/reviews").json() == []


@pytest.mark.parametrize("override", [
    {"reviewer_name": "O"},
    {"reviewer_name": "x" * 256},
    {"rating": 0},
    {"rating": 6},
    {"rating": 3.5},
    {"comment": "Too short"},
    {"comment": "x" * 1001},
    {"reviewer_email": "not-an-email"},
])
def test_submit_review_rejects_invalid_input(client, db, override):
    response = client.post("/portfolio/reviews", json={**VALID_REVIEW, **override})

    assert response.status_code == 422
    field = next(iter(override))
    assert any(field in err["loc"] for err in response.json()["detail"])
    assert db.query(models.Review).count() == 0


def test_submit_review_accepts_optional_email(client, db):
    response = client.post("/portfolio/reviews", json={**VALID_REVIEW, "reviewer_email": "omar@example.com"})
    assert response.status_code == 201
    assert db.query(models.Review).one().reviewer_email == "omar@example.com"


def test_approved_reviews_hide_pending_and_private_fields(client, db):
    pending = crud.create_review(db, {**VALID_REVIEW, "reviewer_email": "a@example.com"})
    approved = crud.create_review(db, {**VALID_REVIEW, "reviewer_email": "b@example.com"})
    crud.approve_review(db, approved, True)

    reviews = client.get("/portfolio/reviews").json()
    assert [r["id"] for r in reviews] == [approved]
    assert pending not in [r["id"] for r in reviews]
    assert "reviewer_email" not in reviews[0]


def test_review_stats_endpoint(client, db):
    for rating in (5, 4):
        review_id = crud.create_review(db, {**VALID_REVIEW, "rating": rating})
        crud.approve_review(db, review_id, True)
    crud.create_review(db, {**VALID_REVIEW, "rating": 1})

    assert client.get("/portfolio/reviews/stats").json() == {"total": 3, "approved": 2, "average": 4.5}


def test_get_experiences_serialises_lists_and_dates(client, db):
    crud.create_experience(db, {
        "company_en": "Larouch for Wooden Furniture",
        "position_en": "CNC Production Engineer",
        "responsibilities_en": ["Operate and program CNC machines"],
        "start_date": datetime.date(2024, 8, 1),
        "is_current": True,
    })

    exp = client.get("/portfolio/experiences").json()[0]
    assert exp["position_en"] == "CNC Production Engineer"
    assert exp["responsibilities_en"] == ["Operate and program CNC machines"]
    assert exp["responsibilities_ar"] == []
    assert exp["start_date"] == "2024-08-01"
    assert exp["end_date"] is None
    assert exp["localized"] is None


def test_lang_query_adds_resolved_text(client, db):
    crud.create_experience(db, {
        "company_en": "Larouch for Wooden Furniture",
        "company_ar": "لاروش للأثاث الخشبي",
        "position_en": "CNC Production Engineer",
        "responsibilities_en": ["Operate CNC machines"],
    })

    exp = client.get("/portfolio/experiences", params={"lang": "ar"}).json()[0]
    assert exp["localized"]["company"] == "لاروش للأثاث الخشبي"
    # No Arabic text stored: falls back to English
    assert exp["localized"]["position"] == "CNC Production Engineer"
    assert exp["localized"]["responsibilities"] == ["Operate CNC machines"]


def test_lang_query_rejects_unknown_language(client):
    assert client.get("/portfolio/skills", params={"lang": "fr"}).status_code == 422


def test_personal_info_localized(client, db):
    crud.upsert_personal_info(db, {"bio_en": "Results-driven professional", "bio_ar": ""})

    info = client.get("/portfolio/personal-info", params={"lang": "ar"}).json()
    assert info["full_name_en"] == "Yasser Sallam"
    assert info["localized"]["full_name"] == "ياسر سلام"
    assert info["localized"]["bio"] == "Results-driven professional"


def test_testimonials_endpoint_lists_featured_only(client, db):
    crud.create_testimonial(db, {"name_en": "Ali", "title_en": "Manager", "content_en": "Great", "is_featured": True})
    crud.create_testimonial(db, {"name_en": "Sara", "title_en": "Designer", "content_en": "Good"})

    assert [t["name_en"] for t in client.get("/portfolio/testimonials").json()] == ["Ali"]


def test_skills_and_talents_follow_display_order(client, db):
    crud.create_skill(db, {"name_en": "Nesting", "display_order": 2})
    crud.create_skill(db, {"name_en": "WoodWOP 7.2", "display_order": 1, "proficiency": 95})
    crud.create_talent(db, {"title_en": "Problem solving", "display_order": 1, "icon": "Lightbulb"})

    skills = client.get("/portfolio/skills").json()
    assert [s["name_en"] for s in skills] == ["WoodWOP 7.2", "Nesting"]
    assert skills[1]["proficiency"] == 80
    assert client.get("/portfolio/talents").json()[0]["icon"] == "Lightbulb"


def test_public_reads_ignore_invalid_session(client):
    response = client.get("/portfolio/skills", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 200
