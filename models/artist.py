from models.db import db


class Artist(db.Model):
    __tablename__ = "artist"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    brand_id = db.Column(db.Integer, db.ForeignKey("brand.id"), nullable=False, index=True)


class ArtistAccess(db.Model):
    __tablename__ = "artist_access"

    artist_id = db.Column(db.Integer, db.ForeignKey("artist.id"), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("user.id"), primary_key=True)

    can_view_payments = db.Column(db.Boolean, default=True, nullable=False)
    can_view_royalties = db.Column(db.Boolean, default=True, nullable=False)
    can_edit_artist_profile = db.Column(db.Boolean, default=True, nullable=False)

    status = db.Column(db.Enum("Pending", "Accepted", name="access_status"), default="Pending", nullable=False)
    invite_hash = db.Column(db.String(255), nullable=True, index=True)

    user = db.relationship("User")
    artist = db.relationship("Artist")
