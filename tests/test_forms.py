from sqlalchemy import func, select

from aci_site.models import Contact, NewsletterSubscriber, db


def _count(app, model):
    with app.app_context():
        return db.session.execute(select(func.count()).select_from(model)).scalar_one()


def test_newsletter_subscribe(app, client):
    resp = client.post("/newsletter", json={"email": " News@Example.com "})
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    with app.app_context():
        sub = db.session.execute(select(NewsletterSubscriber)).scalar_one()
        assert sub.email == "news@example.com"
        assert sub.source == "website_footer"
        assert sub.status == "active"


def test_newsletter_duplicate_is_success(app, client):
    assert client.post("/newsletter", json={"email": "dup@example.com"}).get_json() == {"success": True}
    second = client.post("/newsletter", json={"email": "DUP@example.com", "source": "lp_dynamics"})
    assert second.status_code == 200
    assert second.get_json() == {"success": True, "message": "Already subscribed"}
    assert _count(app, NewsletterSubscriber) == 1


def test_newsletter_custom_source(app, client):
    client.post("/newsletter", json={"email": "lp@example.com", "source": "lp_dynamics"})
    with app.app_context():
        assert db.session.execute(select(NewsletterSubscriber.source)).scalar_one() == "lp_dynamics"


def test_newsletter_invalid_email(app, client):
    for payload in ({"email": "not-an-email"}, {"email": ""}, {}):
        resp = client.post("/newsletter", json=payload)
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Invalid email address"
    assert _count(app, NewsletterSubscriber) == 0


def test_newsletter_without_tables(bare_client):
    body = bare_client.post("/newsletter", json={"email": "a@b.co"}).get_json()
    assert body["success"] is True
    assert "warning" in body


def test_contact_submission(app, client):
    resp = client.post(
        "/contact",
        json={
            "name": "Linus",
            "email": "linus@example.com",
            "reason": "architecture-call",
            "message": "Need help with Databricks",
        },
    )
    assert resp.status_code == 200
    assert resp.get_json() == {"success": True}
    with app.app_context():
        contact = db.session.execute(select(Contact)).scalar_one()
        assert contact.inquiry_type == "architecture-call"
        assert contact.source == "website_contact_form"
        assert contact.company is None


def test_contact_unknown_reason_is_general(app, client):
    client.post("/contact", json={"name": "A", "email": "a@b.co", "reason": "spam", "message": "hi"})
    with app.app_context():
        assert db.session.execute(select(Contact.inquiry_type)).scalar_one() == "general"


def test_contact_validation(app, client):
    assert client.post("/contact", json={"name": "A", "email": "a@b.co", "reason": "general"}).status_code == 400
    resp = client.post("/contact", json={"name": "A", "email": "ab.co", "reason": "general", "message": "x"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid email address"
    assert _count(app, Contact) == 0
