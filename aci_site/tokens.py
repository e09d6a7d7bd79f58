"""Download token issuance."""
import uuid
from datetime import datetime, timedelta, timezone

DEFAULT_TTL_HOURS = 24


def utcnow() -> datetime:
    """Naive UTC now; every DateTime column in this app stores naive UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def issue_token(ttl_hours: int = DEFAULT_TTL_HOURS, now: datetime | None = None) -> tuple[str, datetime]:
    """
    Return (token, expires_at) for a new lead.

    The token is a random UUID4 (122 random bits) in canonical string form.
    Collisions are not retried: at that size they are negligible, and the
    unique index on download_token turns one into a rejected insert.
    """
    issued_at = now or utcnow()
    return str(uuid.uuid4()), issued_at + timedelta(hours=ttl_hours)
