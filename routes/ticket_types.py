from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from flask import Blueprint, request, jsonify, g

from models import db
from models.event import Event
from models.ticket import Ticket
from models.ticket_type import TicketType
from security.rbac import require_admin
from utils.audit import log_event
from utils.auth_context import login_required
from utils.errors import json_body

ticket_types_bp = Blueprint("ticket_types", __name__, url_prefix="/ticket-types")

_UNSET = object()


class _Invalid(Exception):
    pass


def _parse_event_id(raw):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise _Invalid("Invalid event ID")
    if value <= 0:
        raise _Invalid("Invalid event ID")
    return value


def _parse_price(raw) -> Decimal:
    if isinstance(raw, bool):
        raise _Invalid("Invalid price")
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, ValueError):
        raise _Invalid("Invalid price")
    if not value.is_finite() or value < 0:
        raise _Invalid("Invalid price")
    return value.quantize(Decimal("0.01"))


def _parse_max_tickets(raw) -> int:
    if isinstance(raw, bool):
        raise _Invalid("Invalid max tickets value")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise _Invalid("Invalid max tickets value")
    if value < 0:
        raise _Invalid("Invalid max tickets value")
    return value


def _parse_date(raw, label: str):
    # Expect ISO format like "2026-01-20T18:00:00"; stored as naive UTC
    if raw is None or raw == "":
        return None
    try:
        value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        raise _Invalid(f"Invalid {label} date")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_window(start, end):
    if start and end and end <= start:
        raise _Invalid("End date must be after start date")


def _brand_event(event_id: int):
    return Event.query.filter_by(id=event_id, brand_id=g.user.brand_id).first()


def _brand_ticket_type(ticket_type_id: int):
    return (
        TicketType.query
        .join(Event, TicketType.event_id == Event.id)
        .filter(TicketType.id == ticket_type_id, Event.brand_id == g.user.brand_id)
        .first()
    )


def _name_taken(event_id: int, name: str, exclude_id: int = None) -> bool:
    q = TicketType.query.filter(TicketType.event_id == event_id, TicketType.name == name)
    if exclude_id is not None:
        q = q.filter(TicketType.id != exclude_id)
    return q.first() is not None


@ticket_types_bp.get("")
@login_required
def get_ticket_types():
    raw_event_id = request.args.get("event_id")
    if not raw_event_id:
        return jsonify(error="Event ID is required"), 400
    try:
        event_id = _parse_event_id(raw_event_id)
    except _Invalid as exc:
        return jsonify(error=str(exc)), 400

    if not _brand_event(event_id):
        return jsonify(error="Event not found"), 404

    rows = TicketType.query.filter_by(event_id=event_id).order_by(TicketType.id.asc()).all()
    return jsonify(ticketTypes=[
        {
            **t.to_dict(),
            "sold_tickets": t.sold_count(),
            "pending_tickets": t.pending_count(),
            "remaining_tickets": t.remaining_tickets(),
        }
        for t in rows
    ]), 200


@ticket_types_bp.get("/available")
def get_available_ticket_types():
    raw_event_id = request.args.get("event_id")
    if not raw_event_id:
        return jsonify(error="Event ID is required"), 400
    try:
        event_id = _parse_event_id(raw_event_id)
    except _Invalid as exc:
        return jsonify(error=str(exc)), 400

    include_custom = (request.args.get("include_custom") or "").lower() == "true"

    rows = (
        TicketType.query
        .filter_by(event_id=event_id, disabled=False)
        .order_by(TicketType.id.asc())
        .all()
    )

    now = datetime.utcnow()
    out = []
    for t in rows:
        available = t.is_available(now)
        sold_out = t.is_sold_out()
        # custom tickets ignore the sale window and stock
        if not include_custom and (not available or sold_out):
            continue
        out.append({
            **t.to_dict(),
            "is_available": available,
            "is_sold_out": sold_out,
            "remaining_tickets": t.remaining_tickets(),
            "sold_count": t.sold_count(),
        })

    return jsonify(ticketTypes=out), 200


@ticket_types_bp.post("")
@require_admin()
def create_ticket_type():
    data = json_body()
    name = data.get("name")
    if not data.get("event_id") or not isinstance(name, str) or not name.strip() or data.get("price") is None:
        return jsonify(error="Event ID, name, and price are required"), 400

    try:
        event_id = _parse_event_id(data.get("event_id"))
        price = _parse_price(data.get("price"))
        max_tickets = _parse_max_tickets(data.get("max_tickets", 0))
        start_date = _parse_date(data.get("start_date"), "start")
        end_date = _parse_date(data.get("end_date"), "end")
        _check_window(start_date, end_date)
    except _Invalid as exc:
        return jsonify(error=str(exc)), 400

    if not _brand_event(event_id):
        return jsonify(error="Event not found"), 404

    name = name.strip()
    if _name_taken(event_id, name):
        return jsonify(error="A ticket type with this name already exists for this event"), 400

    instructions = data.get("special_instructions")
    ticket_type = TicketType(
        event_id=event_id,
        name=name,
        price=price,
        max_tickets=max_tickets,
        start_date=start_date,
        end_date=end_date,
        disabled=bool(data.get("disabled", False)),
        special_instructions=instructions.strip() if isinstance(instructions, str) and instructions.strip() else None,
    )
    db.session.add(ticket_type)
    db.session.commit()

    log_event("TICKET_TYPE_CREATE", user_id=g.user.id, entity="ticket_type", entity_id=ticket_type.id)
    return jsonify(message="Ticket type created successfully", ticketType=ticket_type.to_dict()), 201


@ticket_types_bp.put("/<int:ticket_type_id>")
@require_admin()
def update_ticket_type(ticket_type_id: int):
    data = json_body()
    name = data.get("name")
    if not isinstance(name, str) or not name.strip() or data.get("price") is None:
        return jsonify(error="Name and price are required"), 400

    try:
        price = _parse_price(data.get("price"))
        max_tickets = _parse_max_tickets(data["max_tickets"]) if "max_tickets" in data else _UNSET
        start_date = _parse_date(data["start_date"], "start") if "start_date" in data else _UNSET
        end_date = _parse_date(data["end_date"], "end") if "end_date" in data else _UNSET
    except _Invalid as exc:
        return jsonify(error=str(exc)), 400

    ticket_type = _brand_ticket_type(ticket_type_id)
    if not ticket_type:
        return jsonify(error="Ticket type not found"), 404

    final_start = ticket_type.start_date if start_date is _UNSET else start_date
    final_end = ticket_type.end_date if end_date is _UNSET else end_date
    try:
        _check_window(final_start, final_end)
    except _Invalid as exc:
        return jsonify(error=str(exc)), 400

    name = name.strip()
    if _name_taken(ticket_type.event_id, name, exclude_id=ticket_type.id):
        return jsonify(error="A ticket type with this name already exists for this event"), 400

    ticket_type.name = name
    ticket_type.price = price
    if max_tickets is not _UNSET:
        ticket_type.max_tickets = max_tickets
    ticket_type.start_date = final_start
    ticket_type.end_date = final_end
    if "disabled" in data:
        ticket_type.disabled = bool(data.get("disabled"))
    if "special_instructions" in data:
        instructions = data.get("special_instructions")
        ticket_type.special_instructions = instructions.strip() if isinstance(instructions, str) and instructions.strip() else None

    db.session.commit()

    log_event("TICKET_TYPE_UPDATE", user_id=g.user.id, entity="ticket_type", entity_id=ticket_type.id)
    return jsonify(message="Ticket type updated successfully", ticketType=ticket_type.to_dict()), 200


@ticket_types_bp.delete("/<int:ticket_type_id>")
@require_admin()
def delete_ticket_type(ticket_type_id: int):
    ticket_type = _brand_ticket_type(ticket_type_id)
    if not ticket_type:
        return jsonify(error="Ticket type not found"), 404

    if TicketType.query.filter_by(event_id=ticket_type.event_id).count() <= 1:
        return jsonify(error="Cannot delete the last ticket type. Events must have at least one ticket type."), 400

    if Ticket.query.filter_by(ticket_type_id=ticket_type.id).count() > 0:
        return jsonify(error="Cannot delete ticket type as there are tickets associated with it"), 400

    db.session.delete(ticket_type)
    db.session.commit()

    log_event("TICKET_TYPE_DELETE", user_id=g.user.id, entity="ticket_type", entity_id=ticket_type_id)
    return jsonify(message="Ticket type deleted successfully"), 200
