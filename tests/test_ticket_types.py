"""Tests for the ticket type handlers."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from models import db
from models.event import Event
from models.ticket import Ticket
from models.ticket_type import TicketType


@pytest.fixture
def event(brand):
    row = Event(brand_id=brand.id, title="Album Launch", date_and_time=datetime(2026, 6, 1, 20, 0))
    db.session.add(row)
    db.session.commit()
    return row


def _ticket_type(event, name="Regular", price="500.00", **fields):
    row = TicketType(event_id=event.id, name=name, price=Decimal(price), **fields)
    db.session.add(row)
    db.session.commit()
    return row


def _ticket(event, ticket_type, status, entries=1):
    db.session.add(Ticket(
        event_id=event.id,
        ticket_type_id=ticket_type.id,
        number_of_entries=entries,
        status=status,
    ))
    db.session.commit()


def test_list_with_stats(client, event, user_headers) -> None:
    vip = _ticket_type(event, "VIP", "1500", max_tickets=10)
    _ticket(event, vip, "Payment Confirmed", entries=3)
    _ticket(event, vip, "Ticket sent.", entries=1)
    _ticket(event, vip, "New", entries=2)
    _ticket(event, vip, "Canceled", entries=5)

    resp = client.get(f"/ticket-types?event_id={event.id}", headers=user_headers)
    assert resp.status_code == 200
    row = resp.get_json()["ticketTypes"][0]
    assert row["price"] == 1500.0
    assert row["sold_tickets"] == 4
    assert row["pending_tickets"] == 2
    assert row["remaining_tickets"] == 6


def test_list_validates_event(client, event, user_headers, other_brand) -> None:
    assert client.get("/ticket-types", headers=user_headers).status_code == 400
    assert client.get("/ticket-types?event_id=abc", headers=user_headers).status_code == 400

    foreign = Event(brand_id=other_brand.id, title="Elsewhere")
    db.session.add(foreign)
    db.session.commit()
    assert client.get(f"/ticket-types?event_id={foreign.id}", headers=user_headers).status_code == 404


def test_available_hides_closed_and_sold_out(client, event) -> None:
    now = datetime.utcnow()
    open_type = _ticket_type(event, "Regular")
    _ticket_type(event, "Early Bird", end_date=now - timedelta(days=1))
    _ticket_type(event, "Door", start_date=now + timedelta(days=1))
    _ticket_type(event, "Hidden", disabled=True)
    limited = _ticket_type(event, "Limited", max_tickets=2)
    _ticket(event, limited, "Payment Confirmed", entries=2)

    resp = client.get(f"/ticket-types/available?event_id={event.id}")
    assert resp.status_code == 200
    names = [t["name"] for t in resp.get_json()["ticketTypes"]]
    assert names == [open_type.name]

    resp = client.get(f"/ticket-types/available?event_id={event.id}&include_custom=true")
    rows = {t["name"]: t for t in resp.get_json()["ticketTypes"]}
    assert set(rows) == {"Regular", "Early Bird", "Door", "Limited"}
    assert rows["Limited"]["is_sold_out"] is True
    assert rows["Early Bird"]["is_available"] is False


def test_create_requires_admin(client, event, user_headers) -> None:
    resp = client.post("/ticket-types", headers=user_headers, json={"event_id": event.id, "name": "VIP", "price": 10})
    assert resp.status_code == 403


def test_create(client, event, admin_headers) -> None:
    resp = client.post("/ticket-types", headers=admin_headers, json={
        "event_id": event.id,
        "name": " VIP ",
        "price": "1500.50",
        "max_tickets": 50,
        "start_date": "2026-05-01T00:00:00Z",
        "end_date": "2026-05-31T23:59:00Z",
        "special_instructions": "  ",
    })
    assert resp.status_code == 201
    body = resp.get_json()["ticketType"]
    assert body["name"] == "VIP"
    assert body["price"] == 1500.5
    assert body["start_date"] == "2026-05-01T00:00:00"
    assert body["special_instructions"] is None


@pytest.mark.parametrize(
    "payload,error",
    [
        ({"price": -1}, "Invalid price"),
        ({"price": "abc"}, "Invalid price"),
        ({"max_tickets": -3}, "Invalid max tickets value"),
        ({"start_date": "not a date"}, "Invalid start date"),
        (
            {"start_date": "2026-05-02T00:00:00", "end_date": "2026-05-01T00:00:00"},
            "End date must be after start date",
        ),
    ],
)
def test_create_validation(client, event, admin_headers, payload, error) -> None:
    body = {"event_id": event.id, "name": "VIP", "price": 10}
    body.update(payload)
    resp = client.post("/ticket-types", headers=admin_headers, json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == error


def test_create_requires_fields(client, event, admin_headers) -> None:
    resp = client.post("/ticket-types", headers=admin_headers, json={"name": "VIP", "price": 10})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Event ID, name, and price are required"


def test_create_duplicate_name(client, event, admin_headers) -> None:
    _ticket_type(event, "VIP")
    resp = client.post("/ticket-types", headers=admin_headers, json={"event_id": event.id, "name": "VIP", "price": 10})
    assert resp.status_code == 400


def test_update_keeps_stored_window(client, event, admin_headers) -> None:
    row = _ticket_type(event, "VIP", start_date=datetime(2026, 5, 10))
    resp = client.put(f"/ticket-types/{row.id}", headers=admin_headers, json={
        "name": "VIP",
        "price": 20,
        "end_date": "2026-05-01T00:00:00",
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "End date must be after start date"

    resp = client.put(f"/ticket-types/{row.id}", headers=admin_headers, json={"name": "VIP Plus", "price": 20})
    assert resp.status_code == 200
    assert row.name == "VIP Plus"
    assert row.start_date == datetime(2026, 5, 10)


def test_update_unknown(client, event, admin_headers) -> None:
    assert client.put("/ticket-types/999", headers=admin_headers, json={"name": "X", "price": 1}).status_code == 404


def test_delete_rules(client, event, admin_headers) -> None:
    only = _ticket_type(event, "Regular")
    resp = client.delete(f"/ticket-types/{only.id}", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json()["error"].startswith("Cannot delete the last ticket type")

    used = _ticket_type(event, "VIP")
    _ticket(event, used, "New")
    resp = client.delete(f"/ticket-types/{used.id}", headers=admin_headers)
    assert resp.status_code == 400
    assert "tickets associated" in resp.get_json()["error"]

    spare_id = _ticket_type(event, "Spare").id
    assert client.delete(f"/ticket-types/{spare_id}", headers=admin_headers).status_code == 200
    assert db.session.get(TicketType, spare_id) is None
