from urllib.parse import urlparse

from flask import Blueprint, request, jsonify, current_app

from models import db
from models.brand import Brand
from models.domain import Domain
from utils.errors import NotFoundError

brand_bp = Blueprint("brand", __name__, url_prefix="/brand")


def _clean_domain(raw: str) -> str:
    domain = raw.strip()
    if "://" in domain:
        domain = urlparse(domain).hostname or ""
    return domain.split(":")[0].lower()


def _default_brand(website: str) -> dict:
    cfg = current_app.config
    return {
        "id": None,
        "name": cfg.get("DEFAULT_BRAND_NAME", "Label Dashboard"),
        "logo": cfg.get("DEFAULT_BRAND_LOGO", "assets/img/default-logo.png"),
        "color": cfg.get("DEFAULT_BRAND_COLOR", "#667eea"),
        "favicon": cfg.get("DEFAULT_BRAND_FAVICON", "assets/img/default.ico"),
        "website": website,
    }


@brand_bp.get("/by-domain")
def get_brand_by_domain():
    raw = request.headers.get("Host") or request.headers.get("Origin") or request.args.get("domain")
    if not raw or not raw.strip():
        return jsonify(error="Domain not provided"), 400

    domain = _clean_domain(raw)
    if not domain:
        return jsonify(error="Domain not provided"), 400

    record = Domain.query.filter_by(domain_name=domain).first()
    brand = record.brand if record else None
    if brand is None:
        return jsonify(_default_brand(domain)), 200

    defaults = _default_brand(domain)
    return jsonify(
        id=brand.id,
        name=brand.brand_name,
        logo=brand.logo_url or defaults["logo"],
        color=brand.brand_color or defaults["color"],
        favicon=brand.favicon_url or defaults["favicon"],
        website=domain,
    ), 200


@brand_bp.get("/<int:brand_id>")
def get_brand_settings(brand_id: int):
    brand = db.session.get(Brand, brand_id)
    if not brand:
        raise NotFoundError("Brand not found")

    return jsonify(
        id=brand.id,
        name=brand.brand_name,
        logo=brand.logo_url,
        color=brand.brand_color,
        favicon=brand.favicon_url or current_app.config.get("DEFAULT_BRAND_FAVICON", "assets/img/default.ico"),
        website=None,
    ), 200
