"""Newsletter and contact form intake."""
from flask import current_app

from aci_site.errors import InternalError, PersistenceError, ValidationError
from aci_site.store import LeadStore

INQUIRY_TYPES = ("architecture-call", "project-inquiry", "partnership", "careers", "general")


def _field(data: dict, key: str) -> str:
    value = data.get(key)
    return str(value).strip() if value is not None else ""


def subscribe_newsletter(store: LeadStore, data, default_source: str = "website_footer") -> dict:
    """Add an email to the newsletter. Subscribing twice is a success both times."""
    if not isinstance(data, dict):
        raise InternalError()
    email = _field(data, "email").lower()
    if not email or "@" not in email:
        raise ValidationError("Invalid email address")
    source = _field(data, "source") or default_source

    result = store.add_subscriber(email, source)
    if result.ok:
        current_app.logger.info("Newsletter: subscribed %s (source: %s)", email, source)
        return {"success": True}
    if result.kind == "duplicate":
        return {"success": True, "message": "Already subscribed"}
    if result.not_configured:
        return {"success": True, "warning": "Database insert pending"}
    raise PersistenceError("Failed to subscribe")


def submit_contact(store: LeadStore, data) -> dict:
    """Store a contact form submission."""
    if not isinstance(data, dict):
        raise InternalError()
    name = _field(data, "name")
    email = _field(data, "email").lower()
    reason = _field(data, "reason")
    message = _field(data, "message")
    if not (name and email and reason and message):
        raise ValidationError("Missing required fields")
    if "@" not in email:
        raise ValidationError("Invalid email address")
    if reason not in INQUIRY_TYPES:
        reason = "general"

    result = store.add_contact(
        name=name,
        email=email,
        company=_field(data, "company") or None,
        phone=_field(data, "phone") or None,
        inquiry_type=reason,
        message=message,
        source="website_contact_form",
        status="new",
    )
    if result.not_configured:
        return {"success": True, "warning": "Database not configured"}
    if result.failed:
        raise PersistenceError("Failed to submit form")
    return {"success": True}
