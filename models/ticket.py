from models.db import db

# statuses that count as sold
SOLD_STATUSES = ("Payment Confirmed", "Ticket sent.")
PENDING_STATUSES = ("New",)


class Ticket(db.Model):
    __tablename__ = "ticket"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("event.id"), nullable=False, index=True)
    ticket_type_id = db.Column(db.Integer, db.ForeignKey("ticket_type.id"), nullable=True, index=True)

    name = db.Column(db.String(255), nullable=True)
    email_address = db.Column(db.String(255), nullable=True)
    number_of_entries = db.Column(db.Integer, default=1, nullable=False)
    status = db.Column(db.String(45), default="New", nullable=False)
