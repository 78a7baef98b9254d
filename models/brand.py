from models.db import db


class Brand(db.Model):
    __tablename__ = "brand"

    id = db.Column(db.Integer, primary_key=True)
    brand_name = db.Column(db.String(255), nullable=False)
    logo_url = db.Column(db.String(255), nullable=True)
    brand_color = db.Column(db.String(45), default="#ffffff", nullable=False)
    brand_website = db.Column(db.String(255), nullable=True)
    favicon_url = db.Column(db.String(255), nullable=True)

    # sublabels point at their parent label
    parent_brand = db.Column(db.Integer, db.ForeignKey("brand.id"), nullable=True)

    domains = db.relationship("Domain", back_populates="brand", lazy=True)
