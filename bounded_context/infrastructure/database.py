"""Database engine and session management."""
import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bounded_context.config.settings import Config
from bounded_context.infrastructure.databases.core_model import configure_core_model, metadata
from bounded_context.middleware.monitoring import db_queries_total, db_query_duration_seconds

logger = logging.getLogger(__name__)


def _setup_db_metrics(engine: Engine) -> None:
    """Setup SQLAlchemy event listeners for database metrics."""

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Record query start time."""
        conn.info.setdefault("query_start_time", []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def receive_after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        """Record query metrics."""
        if conn.info.get("query_start_time"):
            duration = time.time() - conn.info["query_start_time"].pop()
            words = statement.strip().split()
            operation = words[0].lower() if words else "unknown"
            db_queries_total.labels(operation=operation).inc()
            db_query_duration_seconds.labels(operation=operation).observe(duration)


def create_database_engine(
    url: str,
    pool_size: int = 5,
    max_overflow: int = 10,
    echo: bool = False,
) -> Engine:
    """
    Create a database engine.

    Args:
        url: SQLAlchemy database URL
        pool_size: Connection pool size (ignored for SQLite)
        max_overflow: Connections allowed beyond the pool size (ignored for SQLite)
        echo: Whether to log every statement

    Returns:
        Engine instance
    """
    options = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url.rstrip("/").endswith(("sqlite:", "pysqlite:")):
            # A single shared connection, otherwise every connection gets its own empty database
            options["poolclass"] = StaticPool
    else:
        options["pool_size"] = pool_size
        options["max_overflow"] = max_overflow

    engine = create_engine(url, **options)
    _setup_db_metrics(engine)

    if not echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    return engine


class Database:
    """
    The bounded context's core database.

    Owns the engine and hands out sessions, one per unit of work.
    """

    def __init__(self, engine: Engine):
        """
        Initialize the database.

        Args:
            engine: SQLAlchemy engine (Dependency Injection)
        """
        configure_core_model()
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_config(cls, config: Optional[type] = None) -> "Database":
        """Create the database from configuration."""
        config = config or Config
        engine = create_database_engine(
            config.DATABASE_URL,
            pool_size=config.DATABASE_POOL_SIZE,
            max_overflow=config.DATABASE_MAX_OVERFLOW,
            echo=config.DATABASE_ECHO,
        )
        return cls(engine)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Provide a session that commits on success and rolls back on failure.

        Yields:
            Session bound to the core database
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_schema(self) -> None:
        """Create missing tables."""
        metadata.create_all(self.engine)
        logger.info("Database schema created")

    def ping(self) -> bool:
        """Check that the database is reachable."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database ping failed: {e}")
            return False

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()
