import json
from flask import request, g
from models import db
from models.audit_log import AuditLog


def log_event(action: str, user_id=None, entity=None, entity_id=None, metadata=None):
    ip = request.remote_addr
    proxy_ip = request.headers.get("X-Forwarded-For")
    user_agent = request.headers.get("User-Agent", "")

    row = AuditLog(
        user_id=user_id,
        action=action,
        entity=entity,
        entity_id=str(entity_id) if entity_id is not None else None,
        ip=ip,
        proxy_ip=proxy_ip[:255] if proxy_ip else None,
        user_agent=user_agent[:255] if user_agent else None,
        metadata_json=json.dumps(metadata, default=str) if metadata else None
    )
    db.session.add(row)
    db.session.commit()


def log_auth_attempt(success: bool, identifier: str, reason: str = None):
    metadata = {"identifier": identifier or "unknown", "endpoint": request.path}
    if reason:
        metadata["reason"] = reason
    log_event("SYSTEM_AUTH_SUCCESS" if success else "SYSTEM_AUTH_FAILED", metadata=metadata)


def log_system_access(action: str, metadata=None):
    user = getattr(g, "user", None)
    payload = {"endpoint": request.path, "method": request.method}
    if metadata:
        payload.update(metadata)
    log_event(action, user_id=user.id if user else None, metadata=payload)


def log_data_access(resource: str, operation: str, record_count: int, filters=None):
    user = getattr(g, "user", None)
    log_event(
        f"SYSTEM_DATA_{operation}",
        user_id=user.id if user else None,
        entity=resource,
        metadata={"record_count": record_count, "filters": filters},
    )
