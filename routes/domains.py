import re
import shlex

from flask import Blueprint, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.domain import Domain, SSL_ELIGIBLE_STATUSES
from security.rate_limit import limit_system_api
from security.rbac import require_system_api_enabled, require_system_user
from utils.audit import log_data_access, log_system_access
from utils.dns_check import points_to
from utils.errors import json_body
from utils.ssh import run_remote_command

domains_bp = Blueprint("domains", __name__, url_prefix="/system/domains")
domains_bp.before_request(require_system_api_enabled)

_HOSTNAME_RE = re.compile(
    r"^(?=.{1,253}$)(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$"
)


def _mark_unverified(domain: Domain) -> None:
    try:
        (
            Domain.query
            .filter_by(domain_name=domain.domain_name, brand_id=domain.brand_id)
            .update({"status": "Unverified"}, synchronize_session=False)
        )
        db.session.commit()
        current_app.logger.info("[DB] Updated %s status to 'Unverified'", domain.domain_name)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error("[DB] Failed to update %s: %s", domain.domain_name, exc)


@domains_bp.get("/ssl")
@require_system_user
@limit_system_api
def get_ssl_domains():
    """
    Domains that should be on the SSL certificate. Anything whose DNS no
    longer points at the frontend is demoted to 'Unverified' and left out.
    """
    frontend_ip = current_app.config.get("FRONTEND_IP")
    if not frontend_ip:
        current_app.logger.error("FRONTEND_IP environment variable not configured")
        log_system_access("ERROR_SSL_DOMAINS", {"error": "FRONTEND_IP not configured"})
        return jsonify(error="Internal server error"), 500

    rows = (
        Domain.query
        .filter(Domain.status.in_(SSL_ELIGIBLE_STATUSES))
        .order_by(Domain.domain_name.asc())
        .all()
    )
    current_app.logger.info("[API] Found %d domains with SSL-eligible status", len(rows))

    verified, unverified = [], []
    for row in rows:
        if points_to(row.domain_name, frontend_ip):
            verified.append(row.domain_name)
        else:
            current_app.logger.info("[DNS] %s does NOT point to frontend", row.domain_name)
            unverified.append(row.domain_name)
            _mark_unverified(row)

    log_data_access("ssl-domains", "READ", len(verified), {
        "total_queried": len(rows),
        "verified": len(verified),
        "unverified": len(unverified),
        "frontend_ip": frontend_ip,
    })

    return jsonify(
        frontend_ip=frontend_ip,
        total=len(verified),
        domains=verified,
        unverified_domains=unverified,
        summary={
            "total_in_database": len(rows),
            "verified": len(verified),
            "unverified": len(unverified),
        },
    ), 200


@domains_bp.get("/ssl-cert")
@require_system_user
@limit_system_api
def get_ssl_cert_domains():
    wrapper_path = current_app.config.get("SSL_WRAPPER_PATH", "/tmp/ssl-renew-wrapper.sh")
    command = f"grep -oP '(?<=--domains=)[^\\s]+' {shlex.quote(wrapper_path)} || echo \"\""

    result = run_remote_command(command)
    if not result.success:
        current_app.logger.error("[API] Failed to read SSL wrapper script: %s", result.error)
        return jsonify(error="Failed to read SSL certificate domains", details=result.error), 500

    domains = sorted(
        line.strip() for line in result.output.splitlines() if line.strip()
    )
    log_data_access("ssl-cert-domains", "READ", len(domains))
    return jsonify(total=len(domains), domains=domains), 200


@domains_bp.post("/ssl/remove")
@require_system_user
@limit_system_api
def remove_ssl_domain():
    data = json_body()
    domain = data.get("domain")
    if not isinstance(domain, str) or not domain.strip():
        return jsonify(error="Domain name is required"), 400

    domain = domain.strip().lower()
    if not _HOSTNAME_RE.match(domain):
        return jsonify(error="Invalid domain name"), 400

    script = current_app.config.get("REMOVE_SSL_SCRIPT_PATH", "/home/bitnami/remove-ssl-domain.sh")
    timeout = current_app.config.get("SSL_REMOVE_TIMEOUT_SECONDS", 300)
    result = run_remote_command(f"{shlex.quote(script)} --no-renew {domain}", timeout=timeout)

    if not result.success:
        current_app.logger.error("[API] Failed to remove %s: %s", domain, result.error)
        log_system_access("ERROR_SSL_DOMAIN_REMOVE", {"domain": domain, "error": result.error})
        return jsonify(
            success=False,
            error="Failed to remove domain from SSL certificate",
            details=result.error,
        ), 500

    log_data_access("ssl-domain-remove", "WRITE", 1, {"domain": domain})
    return jsonify(
        success=True,
        message=f"Domain {domain} removed from SSL certificate",
        domain=domain,
    ), 200
