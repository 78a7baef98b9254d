from datetime import datetime
from models.db import db


class EmailAttempt(db.Model):
    __tablename__ = "email_attempt"

    id = db.Column(db.Integer, primary_key=True)
    recipients = db.Column(db.Text, nullable=False)  # comma-separated
    subject = db.Column(db.String(500), nullable=False)
    body = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    result = db.Column(db.Enum("Success", "Failed", name="email_result"), nullable=False, index=True)
    brand_id = db.Column(db.Integer, db.ForeignKey("brand.id"), nullable=False, index=True)

    def to_dict(self, include_body: bool = False) -> dict:
        data = {
            "id": self.id,
            "recipients": self.recipients,
            "subject": self.subject,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "result": self.result,
        }
        if include_body:
            data["body"] = self.body
        return data
