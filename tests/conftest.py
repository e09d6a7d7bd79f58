import pytest

from aci_site import create_app
from aci_site.config import TestingConfig
from aci_site.models import db


class NoTablesConfig(TestingConfig):
    """Reachable database with no schema: the partially-deployed case."""

    AUTO_CREATE_TABLES = False


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def bare_app():
    return create_app(NoTablesConfig)


@pytest.fixture
def bare_client(bare_app):
    return bare_app.test_client()


@pytest.fixture
def lead_payload():
    return {
        "name": "Ada Lovelace",
        "email": "  Ada@Example.COM ",
        "company": "Analytical Engines",
        "asset_slug": "ai-readiness-2025",
        "asset_title": "AI Readiness Report 2025",
    }
