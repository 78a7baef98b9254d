import smtplib
from datetime import datetime
from email.message import EmailMessage

from flask import current_app

from models import db
from models.email_attempt import EmailAttempt


def _record_attempt(recipients, subject: str, body: str, ok: bool, brand_id) -> None:
    db.session.add(EmailAttempt(
        recipients=", ".join(recipients),
        subject=subject[:500],
        body=body,
        timestamp=datetime.utcnow(),
        result="Success" if ok else "Failed",
        brand_id=brand_id,
    ))
    db.session.commit()


def _deliver(recipients, subject: str, body: str):
    host = current_app.config.get("SMTP_HOST")
    port = current_app.config.get("SMTP_PORT", 587)
    username = current_app.config.get("SMTP_USERNAME")
    password = current_app.config.get("SMTP_PASSWORD")
    from_email = current_app.config.get("SMTP_FROM_EMAIL") or username
    use_tls = current_app.config.get("SMTP_USE_TLS", True)

    if not host or not from_email:
        return False, "Email not configured"

    msg = EmailMessage()
    msg["From"] = from_email
    msg["To"] = ", ".join(recipients)
    msg["Subject"] = subject
    msg.set_content(body)

    try:
        with smtplib.SMTP(host, port, timeout=10) as server:
            if use_tls:
                server.starttls()
            if username and password:
                server.login(username, password)
            server.send_message(msg)
        return True, None
    except (smtplib.SMTPException, OSError) as exc:
        return False, str(exc)


def send_email(to_email, subject: str, body: str, brand_id=None):
    """
    Sends a plain-text email. Returns (ok, error).
    Brand-scoped sends are recorded for the email log.
    """
    recipients = [to_email] if isinstance(to_email, str) else list(to_email)
    ok, error = _deliver(recipients, subject, body)
    if not ok:
        current_app.logger.warning("Email to %s failed: %s", ", ".join(recipients), error)
    if brand_id is not None:
        _record_attempt(recipients, subject, body, ok, brand_id)
    return ok, error


def send_admin_failed_login_alert(username: str, remote_ip: str, proxy_ip: str, brand_id=None) -> bool:
    admin_email = current_app.config.get("ADMIN_EMAIL")
    if not admin_email:
        current_app.logger.warning("Failed-login alert for %s not sent: ADMIN_EMAIL not set", username)
        return False

    body = (
        f"We've detected multiple login failures for user {username}.\n\n"
        f"Username: {username}\n"
        f"Remote IP: {remote_ip}\n"
        f"Proxy IP: {proxy_ip}\n"
        f"Time: {datetime.utcnow().isoformat()} UTC\n\n"
        "Please investigate this potential security threat."
    )
    try:
        ok, _ = send_email(admin_email, "WARNING: Too many failed logins detected", body, brand_id=brand_id)
    except Exception:
        current_app.logger.exception("Failed-login alert for %s could not be sent", username)
        return False
    return ok
