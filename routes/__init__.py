from .health import health_bp
from .brand import brand_bp
from .auth import auth_bp
from .profile import profile_bp
from .invite import invite_bp
from .email_logs import email_logs_bp
from .songwriters import songwriters_bp
from .ticket_types import ticket_types_bp
from .system_auth import system_auth_bp
from .domains import domains_bp
from .audit_logs import audit_bp

ALL_BLUEPRINTS = (
    health_bp,
    brand_bp,
    auth_bp,
    profile_bp,
    invite_bp,
    email_logs_bp,
    songwriters_bp,
    ticket_types_bp,
    system_auth_bp,
    domains_bp,
    audit_bp,
)
