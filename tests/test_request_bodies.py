"""Malformed JSON bodies are rejected with 400, never a 500."""

import pytest

NOT_AN_OBJECT = "Request body must be a JSON object"


@pytest.mark.parametrize(
    "path",
    ["/auth/login", "/auth/forgot-password", "/auth/reset-password", "/invite/process", "/invite/setup"],
)
def test_public_endpoints_reject_array_body(client, brand, path) -> None:
    resp = client.post(path, json=["artist", "BrandPass123"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_system_login_rejects_array_body(client, system_user) -> None:
    resp = client.post("/system/login", json=["ops@example.com", "SystemPass123"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_system_login_rejects_non_string_email(client, system_user) -> None:
    resp = client.post("/system/login", json={"email": 5, "password": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Email and password are required"


def test_login_rejects_non_string_username(client, brand_user) -> None:
    resp = client.post("/auth/login", json={"username": 5, "password": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "username must be a string"


def test_login_rejects_non_string_password(client, brand_user) -> None:
    resp = client.post("/auth/login", json={"username": "artist", "password": ["BrandPass123"]})
    assert resp.status_code == 400


def test_forgot_password_rejects_list_email(client, brand_user) -> None:
    resp = client.post("/auth/forgot-password", json={"email_address": ["a"]})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "email_address must be a string"


def test_reset_password_rejects_object_code(client, brand_user) -> None:
    resp = client.post("/auth/reset-password", json={"code": {"a": 1}, "new_password": "NewPass123"})
    assert resp.status_code == 400


def test_invite_setup_rejects_non_string_names(client, brand) -> None:
    resp = client.post("/invite/setup", json={
        "first_name": 1,
        "last_name": "Artist",
        "password": "NewPass123",
        "invite_hash": "abc",
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "first_name must be a string"


def test_change_password_rejects_non_string(client, brand_user, user_headers) -> None:
    resp = client.post(
        "/profile/change-password",
        headers=user_headers,
        json={"current_password": 123, "new_password": "NewPass123"},
    )
    assert resp.status_code == 400


def test_profile_update_rejects_array_body(client, brand_user, user_headers) -> None:
    resp = client.put("/profile", headers=user_headers, json=[{"first_name": "Ann"}])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_songwriter_create_rejects_array_body(client, brand_user, user_headers) -> None:
    resp = client.post("/songwriters", headers=user_headers, json=["Joni Mitchell"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_ticket_type_create_rejects_array_body(client, admin_headers) -> None:
    resp = client.post("/ticket-types", headers=admin_headers, json=[1, "VIP", 10])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_ssl_remove_rejects_array_body(client, system_headers) -> None:
    resp = client.post("/system/domains/ssl/remove", headers=system_headers, json=["old.example.com"])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == NOT_AN_OBJECT


def test_missing_body_still_reports_missing_fields(client, brand) -> None:
    resp = client.post("/auth/login", data="not json", content_type="text/plain")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Username and password are required"
