import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

from sqlalchemy import create_engine, Column, DateTime, Uuid, text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.types import TypeDecorator

from foodtrack.config import get_settings, normalize_database_url
from foodtrack.errors import DatastoreUnavailable, TransactionTimeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

settings = get_settings()


def build_engine(url: str, echo: bool = False, busy_timeout: float = 5.0, **engine_kwargs):
    """Create an engine for ``url``, normalising the driver and SSL options."""
    url = normalize_database_url(url)
    connect_args: dict = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False, "timeout": busy_timeout}
    else:
        # Cloud Postgres providers (Supabase, Neon) require SSL connections.
        # For psycopg v3, SSL is configured via the connection URL.
        is_cloud = "supabase" in url or "neon.tech" in url or "pooler" in url
        if is_cloud and "sslmode" not in url:
            url += ("&" if "?" in url else "?") + "sslmode=require"
    return create_engine(url, echo=echo, connect_args=connect_args, **engine_kwargs)


engine = build_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    busy_timeout=settings.TRANSACTION_TIMEOUT_SECONDS,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime that always round-trips as UTC.

    Naive values are taken to be UTC already. SQLite drops tzinfo on
    storage, so results are re-tagged on the way out.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    pass


class BaseMixin:
    """Adds UUID primary key and timestamps to all models."""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Unit of work ─────────────────────────────────────────────────────

# query_canceled (statement_timeout), lock_not_available (lock_timeout)
_TIMEOUT_SQLSTATES = {"57014", "55P03"}


def _is_timeout(exc: DBAPIError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in _TIMEOUT_SQLSTATES:
        return True
    return "database is locked" in str(orig).lower()


def _apply_server_timeouts(db: Session, seconds: float) -> None:
    """Push the transaction bound into PostgreSQL so the server aborts too."""
    if db.get_bind().dialect.name != "postgresql":
        return
    ms = max(1, int(seconds * 1000))
    # SET LOCAL does not accept bind parameters
    db.execute(text(f"SET LOCAL statement_timeout = {ms}"))
    db.execute(text(f"SET LOCAL lock_timeout = {ms}"))


def run_transaction(
    db: Session,
    fn: Callable[[Session], T],
    timeout: float | None = None,
) -> T:
    """
    Run ``fn(db)`` as one all-or-nothing unit.

    Everything ``fn`` writes is flushed and committed together. Any exception
    (raised by ``fn``, the flush or the commit) rolls the whole unit back
    before propagating. If the unit takes longer than ``timeout`` seconds it
    is rolled back and ``TransactionTimeout`` is raised.
    """
    bound = timeout if timeout is not None else get_settings().TRANSACTION_TIMEOUT_SECONDS
    started = time.monotonic()
    try:
        _apply_server_timeouts(db, bound)
        result = fn(db)
        db.flush()
        if time.monotonic() - started > bound:
            raise TransactionTimeout(bound)
        db.commit()
    except OperationalError as exc:
        db.rollback()
        if _is_timeout(exc):
            logger.warning(f"Transaction timed out after {bound}s: {exc.orig}")
            raise TransactionTimeout(bound) from exc
        logger.error(f"Datastore unavailable: {exc.orig}")
        raise DatastoreUnavailable(f"Datastore unavailable: {exc.orig}") from exc
    except DBAPIError as exc:
        db.rollback()
        if exc.connection_invalidated:
            logger.error(f"Datastore connection lost: {exc.orig}")
            raise DatastoreUnavailable(f"Datastore connection lost: {exc.orig}") from exc
        raise
    except Exception:
        db.rollback()
        raise
    return result
