"""Tests for brand lookup and the admin email log."""

from datetime import datetime, timedelta

from models import db
from models.domain import Domain
from models.email_attempt import EmailAttempt


def test_brand_by_domain(client, brand) -> None:
    db.session.add(Domain(brand_id=brand.id, domain_name="label.example.com", status="Connected"))
    db.session.commit()

    resp = client.get("/brand/by-domain", base_url="https://label.example.com")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] == brand.id
    assert body["name"] == "Melt Records"
    assert body["color"] == "#112233"
    assert body["favicon"] == "assets/img/default.ico"
    assert body["website"] == "label.example.com"


def test_brand_by_domain_falls_back_to_defaults(client, brand) -> None:
    resp = client.get("/brand/by-domain", base_url="http://unknown.example.org:8080")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["id"] is None
    assert body["name"] == "Label Dashboard"
    assert body["color"] == "#667eea"
    assert body["website"] == "unknown.example.org"


def test_brand_settings(client, brand) -> None:
    resp = client.get(f"/brand/{brand.id}")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["logo"] == "https://cdn.example.com/melt.png"
    assert body["website"] is None


def test_brand_settings_not_found(client, brand) -> None:
    resp = client.get("/brand/999")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Brand not found"}


def _emails(brand_id, count, start=datetime(2026, 1, 1)):
    for i in range(count):
        db.session.add(EmailAttempt(
            recipients=f"fan{i}@example.com",
            subject=f"Newsletter {i}",
            body=f"Body {i}",
            timestamp=start + timedelta(minutes=i),
            result="Success" if i % 2 == 0 else "Failed",
            brand_id=brand_id,
        ))
    db.session.commit()


def test_email_logs_requires_admin(client, brand_user, user_headers) -> None:
    assert client.get("/email-logs").status_code == 401
    assert client.get("/email-logs", headers=user_headers).status_code == 403


def test_email_logs_pagination_and_brand_scope(client, brand, other_brand, admin_headers) -> None:
    _emails(brand.id, 5)
    _emails(other_brand.id, 3)

    resp = client.get("/email-logs?page=2&limit=2", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["pagination"] == {
        "current_page": 2,
        "total_pages": 3,
        "total_count": 5,
        "per_page": 2,
        "has_next": True,
        "has_prev": True,
    }
    # newest first by default
    assert [row["subject"] for row in body["data"]] == ["Newsletter 2", "Newsletter 1"]
    assert "body" not in body["data"][0]


def test_email_logs_filter_and_sort(client, brand, admin_headers) -> None:
    _emails(brand.id, 5)
    resp = client.get("/email-logs?result=Failed&sortBy=subject&sortDirection=asc", headers=admin_headers)
    subjects = [row["subject"] for row in resp.get_json()["data"]]
    assert subjects == ["Newsletter 1", "Newsletter 3"]


def test_email_logs_limit_is_capped(client, brand, admin_headers) -> None:
    resp = client.get("/email-logs?limit=1000", headers=admin_headers)
    assert resp.get_json()["pagination"]["per_page"] == 100


def test_email_content(client, brand, other_brand, admin_headers) -> None:
    _emails(brand.id, 1)
    _emails(other_brand.id, 1)
    own = EmailAttempt.query.filter_by(brand_id=brand.id).one()
    foreign = EmailAttempt.query.filter_by(brand_id=other_brand.id).one()

    resp = client.get(f"/email-logs/{own.id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["body"] == "Body 0"

    assert client.get(f"/email-logs/{foreign.id}", headers=admin_headers).status_code == 404
