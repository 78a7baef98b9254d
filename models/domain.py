from models.db import db

DOMAIN_STATUSES = ("Verified", "Unverified", "Pending", "Connected", "No SSL")

# Domains that should be on the frontend's SSL certificate
SSL_ELIGIBLE_STATUSES = ("Connected", "No SSL")


class Domain(db.Model):
    __tablename__ = "domain"

    brand_id = db.Column(db.Integer, db.ForeignKey("brand.id"), primary_key=True)
    domain_name = db.Column(db.String(255), primary_key=True, index=True)
    status = db.Column(
        db.Enum(*DOMAIN_STATUSES, name="domain_status"),
        default="Unverified",
        nullable=True,
    )

    brand = db.relationship("Brand", back_populates="domains")
