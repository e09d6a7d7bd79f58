"""
Store access layer.

Every call returns a StoreResult instead of raising, so handlers branch on a
closed set of outcomes (ok / not_configured / no_match / error) rather than
inspecting database error text themselves.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from flask import current_app
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, OperationalError, ProgrammingError, SQLAlchemyError

from aci_site.errors import ConfigurationError, PersistenceError
from aci_site.models import Asset, Contact, NewsletterSubscriber

OK = "ok"
NOT_CONFIGURED = "not_configured"
NO_MATCH = "no_match"
ERROR = "error"

# Postgres SQLSTATE codes
_UNDEFINED_TABLE = "42P01"
_UNIQUE_VIOLATION = "23505"
_CONNECTION_EXCEPTION = "08"  # SQLSTATE class


@dataclass(frozen=True)
class StoreResult:
    outcome: str
    value: Any = None
    kind: str | None = None  # for ERROR: "duplicate" | "rejected"

    @property
    def ok(self) -> bool:
        return self.outcome == OK

    @property
    def not_configured(self) -> bool:
        return self.outcome == NOT_CONFIGURED

    @property
    def no_match(self) -> bool:
        return self.outcome == NO_MATCH

    @property
    def failed(self) -> bool:
        return self.outcome == ERROR

    def unwrap(self):
        """Return value, or raise the request error matching the outcome."""
        if self.outcome == NOT_CONFIGURED:
            raise ConfigurationError()
        if self.outcome == ERROR:
            raise PersistenceError()
        return self.value


def _sqlstate(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _is_sqlite(exc: SQLAlchemyError) -> bool:
    return type(getattr(exc, "orig", None)).__module__.startswith("sqlite3")


def _unreachable(exc: OperationalError, detail: str) -> bool:
    """Connection-class failure or missing schema, as opposed to a rejected statement."""
    if _is_sqlite(exc) or "database is locked" in detail:
        return "no such table" in detail or "unable to open database" in detail
    state = _sqlstate(exc)
    # No SQLSTATE means the driver never got an answer from the server
    return state is None or state.startswith(_CONNECTION_EXCEPTION)


def classify_error(exc: SQLAlchemyError) -> StoreResult:
    """Map a SQLAlchemy exception to a StoreResult."""
    detail = str(getattr(exc, "orig", None) or exc).lower()
    if isinstance(exc, OperationalError):
        if _unreachable(exc, detail):
            return StoreResult(NOT_CONFIGURED)
        # Serialization failure, deadlock, statement timeout, SQLite "database is locked"
        return StoreResult(ERROR, kind="rejected")
    if isinstance(exc, ProgrammingError) and (
        _sqlstate(exc) == _UNDEFINED_TABLE or ("relation" in detail and "does not exist" in detail)
    ):
        return StoreResult(NOT_CONFIGURED)
    if isinstance(exc, IntegrityError) and (_sqlstate(exc) == _UNIQUE_VIOLATION or "unique" in detail):
        return StoreResult(ERROR, kind="duplicate")
    return StoreResult(ERROR, kind="rejected")


class LeadStore:
    """Handle on the relational store, passed into each handler."""

    def __init__(self, db):
        self.db = db

    def _run(self, label: str, fn: Callable[[], StoreResult]) -> StoreResult:
        try:
            return fn()
        except SQLAlchemyError as e:
            self.db.session.rollback()
            result = classify_error(e)
            if result.not_configured:
                current_app.logger.warning("%s: database not configured (%s)", label, e)
            elif result.kind == "duplicate":
                current_app.logger.info("%s: duplicate row", label)
            else:
                current_app.logger.error("%s failed: %s", label, e)
            return result

    # Leads

    def insert_lead(self, model, **fields) -> StoreResult:
        def _insert():
            lead = model(**fields)
            self.db.session.add(lead)
            self.db.session.flush()
            # Snapshot before commit expires the instance
            row = lead.to_dict()
            self.db.session.commit()
            return StoreResult(OK, row)

        return self._run(f"insert {model.__tablename__}", _insert)

    def claim_token(self, model, token: str, now: datetime) -> StoreResult:
        """
        Mark an unused, unexpired token as used.

        The WHERE clause is the only guard against double redemption: of two
        concurrent claims, at most one UPDATE matches a row. Zero rows matched
        is reported as NO_MATCH, never as an error.
        """

        def _claim():
            stmt = (
                update(model)
                .where(
                    model.download_token == token,
                    model.token_used.is_(False),
                    model.token_expires_at > now,
                )
                .values(token_used=True, downloaded_at=now)
                .execution_options(synchronize_session=False)
            )
            rowcount = self.db.session.execute(stmt).rowcount
            self.db.session.commit()
            if rowcount == 1:
                return StoreResult(OK, True)
            return StoreResult(NO_MATCH)

        return self._run(f"claim token in {model.__tablename__}", _claim)

    def find_lead_by_token(self, model, token: str) -> StoreResult:
        def _find():
            lead = self.db.session.execute(
                select(model).filter_by(download_token=token)
            ).scalar_one_or_none()
            if lead is None:
                return StoreResult(NO_MATCH)
            return StoreResult(OK, lead.to_dict())

        return self._run(f"find token in {model.__tablename__}", _find)

    def list_leads(self, model) -> StoreResult:
        def _list():
            rows = self.db.session.execute(
                select(model).order_by(model.created_at.desc(), model.id.desc())
            ).scalars()
            return StoreResult(OK, [r.to_dict() for r in rows])

        return self._run(f"list {model.__tablename__}", _list)

    # Assets

    def find_asset(self, slug: str, category: str | None = None) -> StoreResult:
        def _find():
            stmt = select(Asset).filter_by(slug=slug, status="published")
            if category:
                stmt = stmt.filter_by(category=category)
            asset = self.db.session.execute(stmt).scalar_one_or_none()
            if asset is None:
                return StoreResult(NO_MATCH)
            return StoreResult(OK, asset.to_dict())

        return self._run("find asset", _find)

    def find_featured_asset(self, category: str) -> StoreResult:
        def _find():
            asset = self.db.session.execute(
                select(Asset)
                .filter_by(category=category, is_featured=True, status="published")
                .order_by(Asset.created_at.desc(), Asset.id.desc())
                .limit(1)
            ).scalar_one_or_none()
            if asset is None:
                return StoreResult(NO_MATCH)
            return StoreResult(OK, asset.to_dict())

        return self._run("find featured asset", _find)

    def save_asset(self, slug: str, **fields) -> StoreResult:
        """Insert the asset, or update the existing row with this slug."""

        def _save():
            asset = self.db.session.execute(select(Asset).filter_by(slug=slug)).scalar_one_or_none()
            if asset is None:
                asset = Asset(slug=slug, **fields)
                self.db.session.add(asset)
            else:
                for key, value in fields.items():
                    setattr(asset, key, value)
            self.db.session.commit()
            return StoreResult(OK, asset.to_dict())

        return self._run("save asset", _save)

    # Newsletter / contact

    def add_subscriber(self, email: str, source: str) -> StoreResult:
        def _add():
            self.db.session.add(NewsletterSubscriber(email=email, source=source, status="active"))
            self.db.session.commit()
            return StoreResult(OK)

        return self._run("add newsletter subscriber", _add)

    def add_contact(self, **fields) -> StoreResult:
        def _add():
            self.db.session.add(Contact(**fields))
            self.db.session.commit()
            return StoreResult(OK)

        return self._run("add contact", _add)
