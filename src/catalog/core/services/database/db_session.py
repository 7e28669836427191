"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.context import get_config


def _engine_options(config: ConfigData) -> dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    db = config.database
    options: dict[str, Any] = {"pool_pre_ping": True, "echo": db.echo}

    if db.is_sqlite:
        # Sessions are used from FastAPI's worker threads
        options["connect_args"] = {"check_same_thread": False, "timeout": 20}
        if ":memory:" in db.url:
            # One shared connection, or each session would see its own empty database
            options["poolclass"] = StaticPool
        if config.app.environment == "production":
            logger.warning("SQLite is in use in production; PostgreSQL is recommended")
        return options

    options.update(
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
        pool_timeout=db.pool_timeout,
        pool_recycle=db.pool_recycle,
    )
    if db.url.startswith("postgresql"):
        options["connect_args"] = {
            "application_name": f"catalog_{config.app.environment}",
            "connect_timeout": 30,
        }
    return options


class DbSessionService:
    """Owns the engine and hands out sessions bound to it."""

    def __init__(self, config: ConfigData | None = None):
        config = config or get_config()
        self._engine = create_engine(
            config.database.connection_string, **_engine_options(config)
        )
        logger.bind(
            backend=self._engine.dialect.name,
            environment=config.app.environment,
        ).info("Database engine initialized")

    @property
    def engine(self) -> Engine:
        return self._engine

    def get_session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.bind(error_type=type(e).__name__).debug(
                "Rolled back transaction: {}", e
            )
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False
        return True

    def dispose(self) -> None:
        self._engine.dispose()
