import uuid
from datetime import datetime, timedelta

from aci_site.tokens import issue_token, utcnow


def test_token_is_canonical_uuid4():
    token, _ = issue_token()
    parsed = uuid.UUID(token)
    assert parsed.version == 4
    assert str(parsed) == token


def test_expiry_is_24_hours_after_issue():
    now = datetime(2025, 3, 1, 12, 0, 0)
    _, expires_at = issue_token(now=now)
    assert expires_at == datetime(2025, 3, 2, 12, 0, 0)


def test_custom_ttl():
    now = utcnow()
    _, expires_at = issue_token(ttl_hours=2, now=now)
    assert expires_at - now == timedelta(hours=2)


def test_tokens_do_not_repeat():
    tokens = {issue_token()[0] for _ in range(500)}
    assert len(tokens) == 500


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None
