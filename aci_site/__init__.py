"""ACI Infotech site backend: Flask application factory."""
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from aci_site.errors import SiteError
from aci_site.models import db
from aci_site.routes.leads import leads_bp
from aci_site.routes.main import main_bp
from aci_site.store import LeadStore

# Load .env from project root (parent of aci_site/) so it works regardless of cwd
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path)


def create_app(config_object="aci_site.config.Config", store: LeadStore | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    db.init_app(app)
    if app.config.get("AUTO_CREATE_TABLES"):
        with app.app_context():
            try:
                db.create_all()
            except SQLAlchemyError as e:
                # Endpoints degrade to their not-configured behaviour until the database is reachable
                app.logger.warning("Could not create tables: %s", e)

    app.extensions["lead_store"] = store or LeadStore(db)

    app.register_blueprint(main_bp)
    app.register_blueprint(leads_bp)

    @app.errorhandler(SiteError)
    def site_error(e):
        if e.status_code >= 500:
            app.logger.error("%s: %s", type(e).__name__, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def page_not_found(e):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    return app
