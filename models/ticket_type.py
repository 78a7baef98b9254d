from datetime import datetime

from sqlalchemy import func

from models.db import db
from models.ticket import Ticket, SOLD_STATUSES, PENDING_STATUSES


class TicketType(db.Model):
    __tablename__ = "ticket_type"

    id = db.Column(db.Integer, primary_key=True)
    event_id = db.Column(db.Integer, db.ForeignKey("event.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    # 0 means unlimited
    max_tickets = db.Column(db.Integer, default=0, nullable=False)

    start_date = db.Column(db.DateTime, nullable=True)
    end_date = db.Column(db.DateTime, nullable=True)
    disabled = db.Column(db.Boolean, default=False, nullable=False)
    special_instructions = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    event = db.relationship("Event", back_populates="ticket_types")

    def is_available(self, now=None) -> bool:
        now = now or datetime.utcnow()
        if self.start_date and now < self.start_date:
            return False
        if self.end_date and now > self.end_date:
            return False
        return True

    def _entries_with_status(self, statuses) -> int:
        total = (
            db.session.query(func.coalesce(func.sum(Ticket.number_of_entries), 0))
            .filter(Ticket.ticket_type_id == self.id, Ticket.status.in_(statuses))
            .scalar()
        )
        return int(total or 0)

    def sold_count(self) -> int:
        return self._entries_with_status(SOLD_STATUSES)

    def pending_count(self) -> int:
        return self._entries_with_status(PENDING_STATUSES)

    def remaining_tickets(self):
        """None means unlimited."""
        if not self.max_tickets:
            return None
        return max(0, self.max_tickets - self.sold_count())

    def is_sold_out(self) -> bool:
        if not self.max_tickets:
            return False
        return self.sold_count() >= self.max_tickets

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "name": self.name,
            "price": float(self.price) if self.price is not None else None,
            "max_tickets": self.max_tickets,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "disabled": bool(self.disabled),
            "special_instructions": self.special_instructions,
        }
