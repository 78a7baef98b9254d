from .db import db
from .brand import Brand
from .domain import Domain
from .user import User
from .login_attempt import LoginAttempt
from .email_attempt import EmailAttempt
from .artist import Artist, ArtistAccess
from .songwriter import Songwriter
from .event import Event
from .ticket_type import TicketType
from .ticket import Ticket
from .audit_log import AuditLog
from .rate_limit_bucket import RateLimitBucket
