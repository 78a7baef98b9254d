"""Tests for the songwriter handlers."""

from models import db
from models.songwriter import Songwriter


def _songwriter(name, pro=None, ipi=None):
    row = Songwriter(name=name, pro_affiliation=pro, ipi_number=ipi)
    db.session.add(row)
    db.session.commit()
    return row


def test_search(client, brand_user, user_headers) -> None:
    _songwriter("Joni Mitchell", "ASCAP", "00012345")
    _songwriter("Ely Buendia", "FILSCAP")
    _songwriter("Carole King", "BMI")

    resp = client.get("/songwriters?search=FILSCAP", headers=user_headers)
    assert resp.status_code == 200
    assert [s["name"] for s in resp.get_json()["songwriters"]] == ["Ely Buendia"]

    resp = client.get("/songwriters", headers=user_headers)
    assert [s["name"] for s in resp.get_json()["songwriters"]] == ["Carole King", "Ely Buendia", "Joni Mitchell"]


def test_requires_login(client, brand) -> None:
    assert client.get("/songwriters").status_code == 401


def test_get_songwriter(client, user_headers) -> None:
    row = _songwriter("Joni Mitchell")
    assert client.get(f"/songwriters/{row.id}", headers=user_headers).get_json()["songwriter"]["name"] == "Joni Mitchell"
    assert client.get("/songwriters/999", headers=user_headers).status_code == 404


def test_create_and_reuse_identical(client, user_headers) -> None:
    payload = {"name": " Joni Mitchell ", "pro_affiliation": "ASCAP", "ipi_number": ""}
    first = client.post("/songwriters", headers=user_headers, json=payload)
    assert first.status_code == 201
    assert first.get_json()["songwriter"]["ipi_number"] is None

    second = client.post("/songwriters", headers=user_headers, json=payload)
    assert second.status_code == 200
    assert second.get_json()["songwriter"]["id"] == first.get_json()["songwriter"]["id"]
    assert Songwriter.query.count() == 1


def test_create_requires_name(client, user_headers) -> None:
    assert client.post("/songwriters", headers=user_headers, json={"name": "  "}).status_code == 400


def test_update_requires_admin(client, user_headers) -> None:
    row = _songwriter("Joni Mitchell")
    resp = client.put(f"/songwriters/{row.id}", headers=user_headers, json={"name": "Joni"})
    assert resp.status_code == 403


def test_update_unknown_is_404_before_admin_check(client, user_headers) -> None:
    assert client.put("/songwriters/999", headers=user_headers, json={"name": "Joni"}).status_code == 404


def test_update(client, admin_headers) -> None:
    row = _songwriter("Joni Mitchell")
    resp = client.put(f"/songwriters/{row.id}", headers=admin_headers, json={"ipi_number": "999"})
    assert resp.status_code == 200
    assert row.ipi_number == "999"
    assert row.name == "Joni Mitchell"


def test_update_duplicate_is_conflict(client, admin_headers) -> None:
    _songwriter("Joni Mitchell", "ASCAP", "1")
    row = _songwriter("Joni M", "ASCAP", "1")
    resp = client.put(f"/songwriters/{row.id}", headers=admin_headers, json={"name": "Joni Mitchell"})
    assert resp.status_code == 409


def test_delete(client, admin_headers, user_headers) -> None:
    songwriter_id = _songwriter("Joni Mitchell").id
    assert client.delete(f"/songwriters/{songwriter_id}", headers=user_headers).status_code == 403
    assert client.delete(f"/songwriters/{songwriter_id}", headers=admin_headers).status_code == 200
    assert Songwriter.query.count() == 0
    assert client.delete(f"/songwriters/{songwriter_id}", headers=admin_headers).status_code == 404


def test_search_treats_wildcards_literally(client, brand_user, user_headers) -> None:
    _songwriter("50% Off")
    _songwriter("500 Club")
    _songwriter("DJ_Snake")
    _songwriter("DJ Shadow")

    resp = client.get("/songwriters", query_string={"search": "50%"}, headers=user_headers)
    assert [s["name"] for s in resp.get_json()["songwriters"]] == ["50% Off"]

    resp = client.get("/songwriters", query_string={"search": "DJ_"}, headers=user_headers)
    assert [s["name"] for s in resp.get_json()["songwriters"]] == ["DJ_Snake"]
