from flask import Blueprint, request, jsonify, g
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from models import db
from models.songwriter import Songwriter
from utils.audit import log_event
from utils.auth_context import login_required
from utils.errors import json_body

songwriters_bp = Blueprint("songwriters", __name__, url_prefix="/songwriters")

SEARCH_LIMIT = 50


def _like_pattern(term: str) -> str:
    # % and _ in the search term are literal
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@songwriters_bp.get("")
@login_required
def search_songwriters():
    search = (request.args.get("search") or "").strip()

    q = Songwriter.query
    if search:
        pattern = _like_pattern(search)
        q = q.filter(or_(
            Songwriter.name.like(pattern, escape="\\"),
            Songwriter.pro_affiliation.like(pattern, escape="\\"),
            Songwriter.ipi_number.like(pattern, escape="\\"),
        ))

    rows = q.order_by(Songwriter.name.asc()).limit(SEARCH_LIMIT).all()
    return jsonify(songwriters=[s.to_dict() for s in rows]), 200


@songwriters_bp.get("/<int:songwriter_id>")
@login_required
def get_songwriter(songwriter_id: int):
    songwriter = db.session.get(Songwriter, songwriter_id)
    if not songwriter:
        return jsonify(error="Songwriter not found"), 404
    return jsonify(songwriter=songwriter.to_dict()), 200


@songwriters_bp.post("")
@login_required
def create_songwriter():
    data = json_body()
    name = _optional_text(data.get("name"))
    pro_affiliation = _optional_text(data.get("pro_affiliation"))
    ipi_number = _optional_text(data.get("ipi_number"))

    if not name:
        return jsonify(error="Name is required"), 400

    # same name + PRO + IPI is the same person
    existing = Songwriter.query.filter_by(
        name=name, pro_affiliation=pro_affiliation, ipi_number=ipi_number
    ).first()
    if existing:
        return jsonify(songwriter=existing.to_dict()), 200

    songwriter = Songwriter(name=name, pro_affiliation=pro_affiliation, ipi_number=ipi_number)
    db.session.add(songwriter)
    db.session.commit()

    log_event("SONGWRITER_CREATE", user_id=g.user.id, entity="songwriter", entity_id=songwriter.id)
    return jsonify(songwriter=songwriter.to_dict()), 201


@songwriters_bp.put("/<int:songwriter_id>")
@login_required
def update_songwriter(songwriter_id: int):
    songwriter = db.session.get(Songwriter, songwriter_id)
    if not songwriter:
        return jsonify(error="Songwriter not found"), 404

    if not g.user.is_admin:
        return jsonify(error="Only administrators can update songwriters"), 403

    data = json_body()
    if "name" in data:
        name = _optional_text(data.get("name"))
        if not name:
            return jsonify(error="Name is required"), 400
        songwriter.name = name
    if "pro_affiliation" in data:
        songwriter.pro_affiliation = _optional_text(data.get("pro_affiliation"))
    if "ipi_number" in data:
        songwriter.ipi_number = _optional_text(data.get("ipi_number"))

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify(error="A songwriter with these details already exists"), 409

    log_event("SONGWRITER_UPDATE", user_id=g.user.id, entity="songwriter", entity_id=songwriter.id)
    return jsonify(songwriter=songwriter.to_dict()), 200


@songwriters_bp.delete("/<int:songwriter_id>")
@login_required
def delete_songwriter(songwriter_id: int):
    if not g.user.is_admin:
        return jsonify(error="Only administrators can delete songwriters"), 403

    songwriter = db.session.get(Songwriter, songwriter_id)
    if not songwriter:
        return jsonify(error="Songwriter not found"), 404

    db.session.delete(songwriter)
    db.session.commit()

    log_event("SONGWRITER_DELETE", user_id=g.user.id, entity="songwriter", entity_id=songwriter_id)
    return jsonify(message="Songwriter deleted successfully"), 200
