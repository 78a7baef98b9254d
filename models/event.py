from models.db import db


class Event(db.Model):
    __tablename__ = "event"

    id = db.Column(db.Integer, primary_key=True)
    brand_id = db.Column(db.Integer, db.ForeignKey("brand.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    date_and_time = db.Column(db.DateTime, nullable=True)

    ticket_types = db.relationship("TicketType", back_populates="event", lazy=True)
