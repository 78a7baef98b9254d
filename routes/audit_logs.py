from flask import Blueprint, jsonify, request

from models.audit_log import AuditLog
from security.rate_limit import limit_system_api
from security.rbac import require_system_api_enabled, require_system_user

audit_bp = Blueprint("audit", __name__, url_prefix="/system")
audit_bp.before_request(require_system_api_enabled)

DEFAULT_LIMIT = 200
MAX_LIMIT = 500


@audit_bp.get("/audit-logs")
@require_system_user
@limit_system_api
def list_audit_logs():
    limit = request.args.get("limit", type=int) or DEFAULT_LIMIT
    limit = max(1, min(limit, MAX_LIMIT))

    action = request.args.get("action")
    user_id = request.args.get("user_id", type=int)

    q = AuditLog.query
    if action:
        q = q.filter(AuditLog.action == action)
    if user_id is not None:
        q = q.filter(AuditLog.user_id == user_id)

    rows = q.order_by(AuditLog.timestamp.desc(), AuditLog.id.desc()).limit(limit).all()
    return jsonify([r.to_dict() for r in rows]), 200
