# =======================================================================================
# rfid_dashboard/database.py - Database Management
# =======================================================================================
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import (
    Column, DateTime, Integer, MetaData, String, Table, create_engine, func, text,
)
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool, StaticPool

from .config import Config
from .utils.exceptions import StorageError

logger = logging.getLogger(__name__)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("reg_number", String(64), unique=True, nullable=False),
    Column("name", String(255), nullable=False),
    Column("email", String(255), unique=True, nullable=False),
    Column("password", String(255), nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

rfid_logs = Table(
    "rfid_logs",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_name", String(255), nullable=False),
    Column("card_uid", String(128), nullable=False),
    Column("action", String(64), nullable=False),
    Column("status", String(64), nullable=False),
    Column("timestamp", DateTime, nullable=False, server_default=func.current_timestamp(),
           index=True),
)


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, settings: Config):
        self.engine: Engine = self._build_engine(settings)

    @staticmethod
    def _build_engine(settings: Config) -> Engine:
        url = settings.DB_URL
        if url.startswith("sqlite"):
            # Handlers run in a threadpool; an in-memory database must share one connection
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/") == "sqlite:":
                kwargs["poolclass"] = StaticPool
            return create_engine(url, future=True, **kwargs)

        return create_engine(
            url,
            poolclass=QueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,
            isolation_level="READ COMMITTED",
            future=True,
        )

    @contextmanager
    def get_connection(self) -> Iterator[Connection]:
        """
        Transactional connection: commits on success, rolls back and releases on
        any exception. SQLAlchemy failures surface as StorageError.
        """
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as e:
            logger.exception("Database operation failed")
            raise StorageError() from e

    def execute_query(self, query: str, params: dict = None) -> int:
        """Execute a statement with parameters. Returns the affected row count."""
        with self.get_connection() as conn:
            return conn.execute(text(query), params or {}).rowcount

    def fetch_one(self, query: str, params: dict = None):
        """Fetch a single result."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().first()

    def fetch_all(self, query: str, params: dict = None):
        """Fetch all results."""
        with self.get_connection() as conn:
            result = conn.execute(text(query), params or {})
            return result.mappings().all()

    def init_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        try:
            metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.exception("Schema initialisation failed")
            raise StorageError("Failed to initialise database schema") from e
        logger.info("Database schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def dispose(self) -> None:
        self.engine.dispose()
