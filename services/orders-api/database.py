"""Database connection and session management."""
import logging
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import ForeignKeyConstraint, MetaData, create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from config import DATABASE_URL, ORDERS_EMAIL_FOREIGN_KEY
from models import Base

logger = logging.getLogger(__name__)

# Fallback marker when the driver exposes no structured error category
UNIQUE_VIOLATION_MARKER = "UNIQUE constraint failed"
SQLITE_UNIQUE_ERRORNAMES = {"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"}
POSTGRES_UNIQUE_VIOLATION = "23505"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str = DATABASE_URL, orders_email_foreign_key: bool = ORDERS_EMAIL_FOREIGN_KEY):
        self.url = make_url(url)
        self.orders_email_foreign_key = orders_email_foreign_key
        self.engine = self._create_engine()
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @property
    def is_sqlite(self) -> bool:
        return self.url.get_backend_name() == "sqlite"

    @property
    def location(self) -> str:
        """Human readable database location, without credentials."""
        if self.is_sqlite and self.url.database:
            return str(Path(self.url.database).resolve())
        return self.url.render_as_string(hide_password=True)

    def _create_engine(self) -> Engine:
        if not self.is_sqlite:
            return create_engine(
                self.url,
                pool_pre_ping=True,  # Verify connections before use
                pool_recycle=3600,  # Recycle connections after 1 hour
            )

        if self.url.database and self.url.database != ":memory:":
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

        # Sessions are created and closed on different worker threads
        engine = create_engine(self.url, connect_args={"check_same_thread": False})
        if self.orders_email_foreign_key:
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    def schema_metadata(self) -> MetaData:
        """
        Tables to create for this database.

        With the email foreign key on, the tables are copied into a fresh
        MetaData and orders.email is declared to reference users.email.
        Inserts are unaffected either way; only the DDL differs.
        """
        if not self.orders_email_foreign_key:
            return Base.metadata

        metadata = MetaData()
        for table in Base.metadata.sorted_tables:
            table.to_metadata(metadata)
        metadata.tables["orders"].append_constraint(
            ForeignKeyConstraint(["email"], ["users.email"])
        )
        return metadata

    def init_db(self) -> None:
        """
        Create the tables if they do not exist yet.

        A table that cannot be created is logged and skipped so the service
        still starts; requests touching it fail on their own.
        """
        metadata = self.schema_metadata()
        for table in metadata.sorted_tables:
            try:
                metadata.create_all(bind=self.engine, tables=[table])
            except SQLAlchemyError as e:
                logger.error(f"Error creating {table.name} table: {e}", extra={"table": table.name})
            else:
                logger.info(f"{table.name.capitalize()} table is ready", extra={"table": table.name})

    def get_session(self) -> Generator[Session, None, None]:
        """
        Yield a session scoped to one unit of work.

        Yields:
            Database session
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell whether an IntegrityError was raised by a unique constraint.

    Checks the driver's structured error category first (sqlite3 extended
    error name, PostgreSQL SQLSTATE) and falls back to the SQLite message.
    """
    orig: Optional[BaseException] = getattr(exc, "orig", None)

    errorname = getattr(orig, "sqlite_errorname", None)
    if errorname is not None:
        return errorname in SQLITE_UNIQUE_ERRORNAMES

    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == POSTGRES_UNIQUE_VIOLATION

    return UNIQUE_VIOLATION_MARKER in str(orig if orig is not None else exc)


def error_message(exc: SQLAlchemyError) -> str:
    """Underlying driver message for an SQLAlchemy error."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)
