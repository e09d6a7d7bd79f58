"""
Gated-download lead workflow.

A visitor submits the download form, gets a single-use token valid for
DOWNLOAD_TOKEN_TTL_HOURS, and later trades it for the asset's file location.
Each lead category (whitepaper, playbook) has its own table but shares these
handlers.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from flask import current_app

from aci_site.errors import InternalError, NotFoundError, PersistenceError, ValidationError
from aci_site.models import PlaybookLead, WhitepaperLead
from aci_site.store import LeadStore
from aci_site.tokens import DEFAULT_TTL_HOURS, issue_token, utcnow


@dataclass(frozen=True)
class LeadCategory:
    name: str
    model: type
    source: str
    fallback_path: str  # formatted with slug= when the asset has no stored file

    def fallback_url(self, slug: str) -> str:
        return self.fallback_path.format(slug=slug)


CATEGORIES = {
    "whitepaper": LeadCategory(
        name="whitepaper",
        model=WhitepaperLead,
        source="whitepaper_download",
        fallback_path="/whitepapers/pdfs/{slug}.pdf",
    ),
    "playbook": LeadCategory(
        name="playbook",
        model=PlaybookLead,
        source="playbook_download",
        fallback_path="/playbooks/pdfs/{slug}.pdf",
    ),
}


def get_category(name: str) -> LeadCategory:
    category = CATEGORIES.get((name or "").strip().lower())
    if category is None:
        raise NotFoundError("Unknown lead category")
    return category


def _text(data: dict, *keys: str) -> str:
    """First non-empty value among keys, stripped."""
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return ""


def token_state(lead: dict, now: datetime) -> str | None:
    """Why a stored token can no longer be redeemed, or None if it still can."""
    if lead.get("token_used"):
        return "already_used"
    expires_at = lead.get("token_expires_at")
    if expires_at and datetime.fromisoformat(expires_at) <= now:
        return "expired"
    return None


class LeadHandlers:
    """Intake, redemption, validity check and admin listing for one lead category."""

    def __init__(
        self,
        store: LeadStore,
        category: LeadCategory,
        ttl_hours: int = DEFAULT_TTL_HOURS,
        notify: Callable[..., None] | None = None,
    ):
        self.store = store
        self.category = category
        self.ttl_hours = ttl_hours
        self.notify = notify

    def intake(self, data) -> dict:
        """Validate a download form submission, store the lead and return its token."""
        if not isinstance(data, dict):
            raise InternalError()
        prefix = self.category.name
        name = _text(data, "name")
        email = _text(data, "email").lower()
        company = _text(data, "company")
        asset_slug = _text(data, "asset_slug", f"{prefix}_slug")
        asset_title = _text(data, "asset_title", f"{prefix}_title") or None
        if not (name and email and company and asset_slug):
            raise ValidationError("Missing required fields")

        token, expires_at = issue_token(self.ttl_hours)
        result = self.store.insert_lead(
            self.category.model,
            name=name,
            email=email,
            company=company,
            asset_slug=asset_slug,
            asset_title=asset_title,
            download_token=token,
            token_expires_at=expires_at,
            token_used=False,
            source=self.category.source,
            status="new",
        )
        if result.not_configured:
            # Back-office table missing must not block the visitor's download
            return {
                "success": True,
                "downloadToken": token,
                "token": token,
                "warning": "Database table not configured - token not stored",
            }
        if result.failed:
            raise PersistenceError("Failed to submit form")

        current_app.logger.info("New %s lead for %s (%s)", prefix, asset_slug, email)
        if self.notify:
            self.notify(prefix, name, email, company, asset_title)
        return {"success": True, "downloadToken": token, "token": token}

    def redeem(self, data, now: datetime | None = None) -> dict:
        """
        Consume a token and resolve the asset's download location.

        Lenient by policy: store failures and rejected tokens still return the
        download location; tokenUsed tells whether this call consumed the token.
        """
        if not isinstance(data, dict):
            raise InternalError()
        prefix = self.category.name
        token = _text(data, "token")
        asset_slug = _text(data, "asset_slug", f"{prefix}Slug", f"{prefix}_slug")
        if not (token and asset_slug):
            raise ValidationError("Missing required fields")

        now = now or utcnow()
        claim = self.store.claim_token(self.category.model, token, now)
        reason = None
        if claim.no_match:
            reason = self._rejection_reason(token, now)
            current_app.logger.info("Token redemption rejected for %s: %s", asset_slug, reason)

        asset = self.store.find_asset(asset_slug, category=prefix)
        asset_row = asset.value if asset.ok else {}
        download_url = asset_row.get("file_url") or self.category.fallback_url(asset_slug)

        body = {
            "success": True,
            "downloadUrl": download_url,
            "title": asset_row.get("title"),
            "tokenUsed": claim.ok,
        }
        if reason:
            body["reason"] = reason
        return body

    def _rejection_reason(self, token: str, now: datetime) -> str | None:
        lead = self.store.find_lead_by_token(self.category.model, token)
        if lead.no_match:
            return "not_found"
        if not lead.ok:
            return None
        return token_state(lead.value, now)

    def check_token(self, token: str | None, now: datetime | None = None) -> dict:
        """Read-only pre-flight check before the download UI is shown."""
        token = (token or "").strip()
        if not token:
            return {"valid": False}
        result = self.store.find_lead_by_token(self.category.model, token)
        if result.not_configured:
            return {"valid": True, "warning": "Token store not configured"}
        if result.failed:
            return {"valid": False}
        if result.no_match:
            return {"valid": False, "reason": "not_found"}
        reason = token_state(result.value, now or utcnow())
        if reason:
            return {"valid": False, "reason": reason}
        return {"valid": True}

    def list_leads(self) -> dict:
        """All leads of this category, newest first. Empty list on any store failure."""
        result = self.store.list_leads(self.category.model)
        if not result.ok:
            current_app.logger.warning("Listing %s leads failed (%s); returning empty list", self.category.name, result.outcome)
            return {"leads": []}
        return {"leads": result.value}
