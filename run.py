"""Serve the lead-capture and download API locally (PORT, default 5001)."""
import os

from aci_site import create_app

# aci_site loads .env itself; DATABASE_URL unset means local.db
app = create_app(os.environ.get("ACI_SITE_CONFIG", "aci_site.config.Config"))

if __name__ == "__main__":
    app.run(
        host="0.0.0.0",
        port=int(os.environ.get("PORT", 5001)),
        debug=app.config["DEBUG"],
    )
