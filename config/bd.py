# config/bd.py
import logging
import time
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()

PG_UNIQUE_VIOLATION = "23505"
PG_FOREIGN_KEY_VIOLATION = "23503"


class StorageError(Exception):
    """Any failure coming from the database that is not a known constraint."""


class UniqueViolation(StorageError):
    """A unique constraint rejected the write."""


class MissingReference(StorageError):
    """A foreign key pointed at a row that does not exist."""


def _classify(exc):
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None)
    message = str(orig or exc).lower()
    if code == PG_UNIQUE_VIOLATION or "unique constraint" in message or "duplicate key" in message:
        return UniqueViolation
    if code == PG_FOREIGN_KEY_VIOLATION or "foreign key constraint" in message:
        return MissingReference
    return StorageError


@contextmanager
def translate_errors():
    try:
        yield
    except IntegrityError as e:
        raise _classify(e)(str(e.orig)) from e
    except (DBAPIError, SQLAlchemyError) as e:
        raise StorageError(str(e)) from e


def _as_statement(statement):
    return text(statement) if isinstance(statement, str) else statement


def _fetch(conn, statement, params):
    result = conn.execute(_as_statement(statement), params or {})
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings()]


class Unit:
    """Statement runner bound to one open transaction."""

    def __init__(self, conn):
        self.conn = conn

    def run_query(self, statement, params=None):
        with translate_errors():
            return _fetch(self.conn, statement, params)


class Database:
    """Connection pool plus the two ways of talking to it.

    ``run_query`` runs one statement in its own transaction,
    ``run_in_transaction`` runs a unit of work that commits or rolls back as
    a whole. Connections go back to the pool on every exit path.
    """

    def __init__(self, url, **engine_options):
        self.url = url
        options = {"pool_pre_ping": True}
        if url.startswith("sqlite"):
            options["connect_args"] = {"check_same_thread": False}
        else:
            options.update(pool_size=5, max_overflow=10)
        options.update(engine_options)
        self.engine = create_engine(url, **options)

        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

    def run_query(self, statement, params=None):
        with translate_errors():
            with self.engine.begin() as conn:
                return _fetch(conn, statement, params)

    def run_in_transaction(self, fn):
        with translate_errors():
            with self.engine.begin() as conn:
                return fn(Unit(conn))

    def init_schema(self):
        # Registers every table on Base.metadata
        from models import floor_model, outlet_model, room_model, user_model  # noqa: F401

        with translate_errors():
            Base.metadata.create_all(bind=self.engine)
        logger.info("Schema ready (%d tables)", len(Base.metadata.tables))

    def wait_until_ready(self, attempts=10, delay=3):
        for attempt in range(1, attempts + 1):
            try:
                with self.engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                return True
            except OperationalError:
                logger.warning(
                    "Database not ready (attempt %d/%d), retrying in %ss", attempt, attempts, delay
                )
                if attempt < attempts:
                    time.sleep(delay)
        return False

    def dispose(self):
        self.engine.dispose()


def _enable_sqlite_foreign_keys(dbapi_connection, _record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
