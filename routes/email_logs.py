import math

from flask import Blueprint, request, jsonify, g
from sqlalchemy import String, cast

from models.email_attempt import EmailAttempt
from security.rbac import require_admin

email_logs_bp = Blueprint("email_logs", __name__, url_prefix="/email-logs")

FILTERABLE_FIELDS = ("recipients", "subject", "timestamp", "result")
MAX_PAGE_SIZE = 100


def _positive_int(name: str, default: int) -> int:
    value = request.args.get(name, type=int)
    return value if value and value > 0 else default


@email_logs_bp.get("")
@require_admin()
def list_email_logs():
    page = _positive_int("page", 1)
    limit = min(_positive_int("limit", 50), MAX_PAGE_SIZE)

    q = EmailAttempt.query.filter(EmailAttempt.brand_id == g.user.brand_id)

    for field in FILTERABLE_FIELDS:
        value = (request.args.get(field) or "").strip()
        if not value:
            continue
        column = getattr(EmailAttempt, field)
        # dates and enums are matched on their text form
        q = q.filter(cast(column, String).like(f"%{value}%"))

    sort_by = request.args.get("sortBy")
    direction = (request.args.get("sortDirection") or "DESC").upper()
    if sort_by in FILTERABLE_FIELDS:
        column = getattr(EmailAttempt, sort_by)
        q = q.order_by(column.asc() if direction == "ASC" else column.desc())
    else:
        q = q.order_by(EmailAttempt.timestamp.desc())

    total = q.count()
    rows = q.offset((page - 1) * limit).limit(limit).all()
    total_pages = math.ceil(total / limit)

    return jsonify(
        data=[r.to_dict() for r in rows],
        pagination={
            "current_page": page,
            "total_pages": total_pages,
            "total_count": total,
            "per_page": limit,
            "has_next": page < total_pages,
            "has_prev": page > 1,
        },
    ), 200


@email_logs_bp.get("/<int:email_id>")
@require_admin()
def get_email_content(email_id: int):
    row = EmailAttempt.query.filter_by(id=email_id, brand_id=g.user.brand_id).first()
    if not row:
        return jsonify(error="Email not found"), 404
    return jsonify(row.to_dict(include_body=True)), 200
