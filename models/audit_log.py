import json
from datetime import datetime

from models.db import db


class AuditLog(db.Model):
    """Append-only trail of authentication and system-access events."""

    __tablename__ = "audit_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=True)  # NULL before a caller is identified
    action = db.Column(db.String(80), nullable=False)  # e.g. SYSTEM_AUTH_FAILED, SYSTEM_LOGIN
    entity = db.Column(db.String(80), nullable=True)   # e.g. ssl-domains, songwriter
    entity_id = db.Column(db.String(80), nullable=True)

    ip = db.Column(db.String(64), nullable=True)
    proxy_ip = db.Column(db.String(255), nullable=True)
    user_agent = db.Column(db.String(255), nullable=True)
    metadata_json = db.Column(db.Text, nullable=True)

    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def metadata_dict(self):
        if not self.metadata_json:
            return None
        try:
            return json.loads(self.metadata_json)
        except ValueError:
            return self.metadata_json

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": self.timestamp.isoformat() if self.timestamp else None,
            "user_id": self.user_id,
            "action": self.action,
            "entity": self.entity,
            "entity_id": self.entity_id,
            "ip": self.ip,
            "proxy_ip": self.proxy_ip,
            "user_agent": self.user_agent,
            "metadata": self.metadata_dict(),
        }
