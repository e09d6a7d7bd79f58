"""
Publish (insert or update) a downloadable asset.

Usage:
  python3 scripts/publish_asset.py --slug ai-readiness-2025 --title "AI Readiness Report" \
      --file-url https://cdn.example.com/ai-readiness-2025.pdf --featured
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from aci_site import create_app
from aci_site.errors import SiteError
from aci_site.leads import CATEGORIES


def run(args: argparse.Namespace) -> dict:
    app = create_app()
    fields = {
        "title": args.title,
        "category": args.category,
        "status": "draft" if args.draft else "published",
        "is_featured": args.featured,
    }
    # Only overwrite optional columns that were given
    for key in ("description", "cover_image", "file_url"):
        value = getattr(args, key)
        if value is not None:
            fields[key] = value
    with app.app_context():
        return app.extensions["lead_store"].save_asset(args.slug, **fields).unwrap()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--slug", required=True)
    parser.add_argument("--title", required=True)
    parser.add_argument("--category", choices=sorted(CATEGORIES), default="whitepaper")
    parser.add_argument("--description")
    parser.add_argument("--cover-image", dest="cover_image")
    parser.add_argument("--file-url", dest="file_url")
    parser.add_argument("--featured", action="store_true")
    parser.add_argument("--draft", action="store_true", help="Save without publishing")
    args = parser.parse_args(argv)
    try:
        asset = run(args)
    except SiteError as e:
        print("ERROR:", e.message)
        return 1
    print("Saved asset:", asset["slug"], f"({asset['status']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
