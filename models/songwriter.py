from datetime import datetime
from models.db import db


class Songwriter(db.Model):
    __tablename__ = "songwriter"
    __table_args__ = (
        db.UniqueConstraint("name", "pro_affiliation", "ipi_number", name="unique_songwriter"),
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    pro_affiliation = db.Column(db.String(100), nullable=True)  # e.g. ASCAP, FILSCAP
    ipi_number = db.Column(db.String(20), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "pro_affiliation": self.pro_affiliation,
            "ipi_number": self.ipi_number,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
