"""Application configuration."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base directory (project root)
BASE_DIR = Path(__file__).resolve().parent.parent
_env_file = BASE_DIR / ".env"

# .env in project root first, then cwd (running from scripts/ or a service unit)
if _env_file.exists():
    load_dotenv(_env_file)
elif (Path.cwd() / ".env").exists():
    load_dotenv(Path.cwd() / ".env")


def _env_flag(key: str, default: bool) -> bool:
    raw = (os.environ.get(key) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _get_sqlalchemy_uri() -> str:
    """Database URI: from DATABASE_URL, or SQLite for local dev when unset."""
    uri = (os.environ.get("DATABASE_URL") or "").strip()
    if uri:
        # Hosted Postgres providers still hand out postgres:// URLs
        return uri.replace("postgres://", "postgresql://", 1)
    path = BASE_DIR / "local.db"
    return f"sqlite:///{path.as_posix()}"


class Config:
    """Default configuration."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production")
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    TESTING = False
    SQLALCHEMY_DATABASE_URI = _get_sqlalchemy_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    # Off when the schema is managed elsewhere (e.g. migrations on the hosted database)
    AUTO_CREATE_TABLES = _env_flag("AUTO_CREATE_TABLES", True)
    DOWNLOAD_TOKEN_TTL_HOURS = int(os.environ.get("DOWNLOAD_TOKEN_TTL_HOURS") or 24)
    SLACK_WEBHOOK_URL = os.environ.get("SLACK_WEBHOOK_URL", "").strip()
    NEWSLETTER_DEFAULT_SOURCE = "website_footer"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class TestingConfig(Config):
    """In-memory SQLite, no outbound webhooks."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    AUTO_CREATE_TABLES = True
    SLACK_WEBHOOK_URL = ""
