"""Create database tables. Run from project root: python3 scripts/create_tables.py"""
import sys
from pathlib import Path

_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from aci_site import create_app
from aci_site.models import db

app = create_app()
with app.app_context():
    print("Database:", app.config["SQLALCHEMY_DATABASE_URI"].split("@")[-1])
    db.create_all()
    print("Tables created.")
