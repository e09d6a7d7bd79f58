"""Main (public) JSON routes: newsletter, contact form, published assets."""
from flask import Blueprint, current_app, jsonify, request

from aci_site.forms import submit_contact, subscribe_newsletter

main_bp = Blueprint("main", __name__)


@main_bp.route("/newsletter", methods=["POST"])
def newsletter():
    """Footer / landing page newsletter sign-up."""
    return jsonify(
        subscribe_newsletter(
            current_app.extensions["lead_store"],
            request.get_json(silent=True),
            default_source=current_app.config.get("NEWSLETTER_DEFAULT_SOURCE", "website_footer"),
        )
    )


@main_bp.route("/contact", methods=["POST"])
def contact():
    """Contact form submission."""
    return jsonify(submit_contact(current_app.extensions["lead_store"], request.get_json(silent=True)))


@main_bp.route("/assets/featured")
def featured_asset():
    """Latest featured published asset for a category (whitepaper by default)."""
    category = (request.args.get("category") or "whitepaper").strip().lower()
    result = current_app.extensions["lead_store"].find_featured_asset(category)
    return jsonify({"asset": result.value if result.ok else None})


@main_bp.route("/assets/<slug>")
def asset(slug):
    """Published asset by slug; null when missing or the store is unavailable."""
    result = current_app.extensions["lead_store"].find_asset(slug)
    return jsonify({"asset": result.value if result.ok else None})
