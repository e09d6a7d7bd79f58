"""Gated-download lead endpoints (one set per lead category)."""
from flask import Blueprint, current_app, jsonify, request

from aci_site.leads import LeadHandlers, get_category
from aci_site.notify import notify_slack_lead

leads_bp = Blueprint("leads", __name__, url_prefix="/leads")


def _handlers(category: str) -> LeadHandlers:
    return LeadHandlers(
        current_app.extensions["lead_store"],
        get_category(category),
        ttl_hours=current_app.config.get("DOWNLOAD_TOKEN_TTL_HOURS", 24),
        notify=notify_slack_lead,
    )


@leads_bp.route("/<category>", methods=["POST"])
def submit_lead(category):
    """Download form submission; returns the download token."""
    handlers = _handlers(category)
    return jsonify(handlers.intake(request.get_json(silent=True)))


@leads_bp.route("/<category>", methods=["GET"])
def list_leads(category):
    """Admin: all leads for the category, newest first."""
    return jsonify(_handlers(category).list_leads())


@leads_bp.route("/<category>/verify")
def verify_token(category):
    """Pre-flight token check before showing the download UI."""
    return jsonify(_handlers(category).check_token(request.args.get("token")))


@leads_bp.route("/<category>/download", methods=["POST"])
def download(category):
    """Redeem a token; returns the file location to redirect to."""
    handlers = _handlers(category)
    return jsonify(handlers.redeem(request.get_json(silent=True)))
