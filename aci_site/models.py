"""SQLAlchemy models."""
from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from aci_site.tokens import utcnow

db = SQLAlchemy()


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class LeadMixin:
    """Columns shared by every gated-download lead table."""

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    asset_slug: Mapped[str] = mapped_column(String(120), nullable=False)
    asset_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    download_token: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    token_expires_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    token_used: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    downloaded_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    source: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="new", nullable=False)  # new | contacted | qualified
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "company": self.company,
            "asset_slug": self.asset_slug,
            "asset_title": self.asset_title,
            "download_token": self.download_token,
            "token_expires_at": _iso(self.token_expires_at),
            "token_used": self.token_used,
            "downloaded_at": _iso(self.downloaded_at),
            "source": self.source,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.email} ({self.asset_slug})>"


class WhitepaperLead(LeadMixin, db.Model):
    """A whitepaper download request."""

    __tablename__ = "whitepaper_leads"


class PlaybookLead(LeadMixin, db.Model):
    """A playbook download request."""

    __tablename__ = "playbook_leads"


class Asset(db.Model):
    """A published downloadable document (whitepaper, playbook)."""

    __tablename__ = "assets"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(120), nullable=False, unique=True, index=True)
    category: Mapped[str] = mapped_column(String(40), nullable=False, default="whitepaper")
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    cover_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="draft", nullable=False)  # draft | published
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "cover_image": self.cover_image,
            "file_url": self.file_url,
            "is_featured": self.is_featured,
            "status": self.status,
            "created_at": _iso(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<Asset {self.slug} ({self.status})>"


class NewsletterSubscriber(db.Model):
    """A newsletter sign-up from the site footer or a landing page."""

    __tablename__ = "newsletter_subscribers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    source: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="active", nullable=False)  # active | unsubscribed | bounced
    subscribed_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<NewsletterSubscriber {self.email}>"


class Contact(db.Model):
    """A contact form submission."""

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(40), nullable=True)
    inquiry_type: Mapped[str] = mapped_column(String(40), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    source: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="new", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Contact {self.email} ({self.inquiry_type})>"
