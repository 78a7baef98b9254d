from datetime import datetime
from models.db import db

class RateLimitBucket(db.Model):
    __tablename__ = "rate_limit_buckets"

    id = db.Column(db.Integer, primary_key=True)
    # "login:<ip>" or "system:<user id>"
    bucket_key = db.Column(db.String(128), unique=True, nullable=False, index=True)

    window_start = db.Column(db.DateTime, nullable=False)
    count = db.Column(db.Integer, default=0, nullable=False)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
