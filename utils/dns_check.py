import socket

from flask import current_app


def resolve_ipv4(domain: str) -> list[str]:
    """A records for a domain; empty when it does not resolve."""
    try:
        _, _, addresses = socket.gethostbyname_ex(domain)
    except (socket.gaierror, socket.herror, UnicodeError) as exc:
        current_app.logger.info("[DNS] Failed to resolve %s: %s", domain, exc)
        return []
    return sorted(set(addresses))


def points_to(domain: str, ip: str) -> bool:
    return ip in resolve_ipv4(domain)
