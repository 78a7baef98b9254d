from datetime import datetime
from models.db import db

class LoginAttempt(db.Model):
    __tablename__ = "login_attempt"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), nullable=False, index=True)

    # "Successful" or "Failed"; rows are append-only
    status = db.Column(db.Enum("Successful", "Failed", name="login_status"), nullable=False)
    date_and_time = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    # NULL for system users
    brand_id = db.Column(db.Integer, nullable=True)

    proxy_ip = db.Column(db.String(45), nullable=True)
    remote_ip = db.Column(db.String(45), nullable=True)
