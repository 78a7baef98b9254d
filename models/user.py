from models.db import db


class User(db.Model):
    __tablename__ = "user"
    __table_args__ = (
        db.Index("idx_user_system_email", "is_system_user", "email_address"),
        db.Index("idx_user_system_brand", "is_system_user", "brand_id"),
    )

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(45), nullable=True)
    email_address = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(45), nullable=True)
    last_name = db.Column(db.String(45), nullable=True)

    # legacy unsalted digest, cleared once a bcrypt hash is stored
    password_md5 = db.Column(db.String(255), nullable=True)
    password_hash = db.Column(db.String(255), nullable=True)

    is_admin = db.Column(db.Boolean, default=False, nullable=False)
    is_system_user = db.Column(db.Boolean, default=False, nullable=False)

    # NULL for system users, required for everyone else
    brand_id = db.Column(db.Integer, db.ForeignKey("brand.id"), nullable=True)

    reset_hash = db.Column(db.String(255), nullable=True, index=True)
    last_logged_in = db.Column(db.DateTime, nullable=True)

    brand = db.relationship("Brand")

    def is_valid_system_user(self) -> bool:
        if not self.is_system_user:
            return False
        if self.brand_id is not None:
            return False
        return bool(self.email_address and self.email_address.strip())

    def has_password(self) -> bool:
        return bool((self.password_hash or "").strip() or (self.password_md5 or "").strip())

    def display_name(self) -> str:
        return self.username or self.email_address

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email_address": self.email_address,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "is_admin": bool(self.is_admin),
            "brand_id": self.brand_id,
        }

    def to_system_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email_address": self.email_address,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "is_system_user": True,
        }
