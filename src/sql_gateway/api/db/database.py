"""Database provisioning and session management.

Provides the SQLAlchemy engine (the process-wide connection pool), the
idempotent provisioning sequence run before the server accepts traffic, and
the session dependency for FastAPI routes.

Production: MySQL via PyMySQL (database created on a best-effort basis)
Development/tests: SQLite (file-based or in-memory, no bootstrap step)
"""

from collections.abc import Generator
from typing import Annotated

import structlog
from fastapi import Depends, Request
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from sql_gateway.api.models.database import Base
from sql_gateway.config import Settings

logger = structlog.get_logger(__name__)

# Backends whose server accepts CREATE DATABASE IF NOT EXISTS
SERVER_BACKENDS = ("mysql", "mariadb")


def create_gateway_engine(url: URL | str, echo: bool = False) -> Engine:
    """Create the shared engine scoped to the target database.

    For SQLite: check_same_thread=False allows the threadpool to share connections
    """
    engine_url = make_url(url)
    connect_args = {"check_same_thread": False} if engine_url.get_backend_name() == "sqlite" else {}
    return create_engine(engine_url, connect_args=connect_args, echo=echo)


def ensure_database(url: URL) -> bool:
    """Create the target database if the server allows it.

    Opens a bootstrap connection with no database selected, issues
    ``CREATE DATABASE IF NOT EXISTS`` and closes it again. Managed hosts often
    pre-provision the database and deny the privilege; that failure is logged
    and startup continues.

    Args:
        url: URL of the target database

    Returns:
        bool: True if the statement ran, False if skipped or refused
    """
    backend = url.get_backend_name()
    if backend not in SERVER_BACKENDS or not url.database:
        logger.info("database_create_skipped", backend=backend, database=url.database, reason="no server database")
        return False

    bootstrap_url = URL.create(
        url.drivername,
        username=url.username,
        password=url.password,
        host=url.host,
        port=url.port,
        query=url.query,
    )
    bootstrap = create_engine(bootstrap_url, poolclass=NullPool)
    try:
        quoted = bootstrap.dialect.identifier_preparer.quote_identifier(url.database)
        with bootstrap.begin() as conn:
            conn.exec_driver_sql(f"CREATE DATABASE IF NOT EXISTS {quoted}")
    except SQLAlchemyError as e:
        logger.warning("database_create_skipped", database=url.database, error=str(e))
        return False
    finally:
        bootstrap.dispose()

    logger.info("database_ensured", database=url.database)
    return True


def create_tables(engine: Engine) -> None:
    """Create the patient table if it does not exist yet."""
    Base.metadata.create_all(bind=engine)


def provision(settings: Settings) -> Engine:
    """Run the full provisioning sequence and return the shared engine.

    Steps:
    1. Best-effort ``CREATE DATABASE IF NOT EXISTS`` over a bootstrap connection
    2. Create the engine scoped to the target database
    3. Create the patient table if absent

    Raises:
        SQLAlchemyError: If the engine cannot reach the database or the table
            cannot be created. Callers must not serve traffic in that case.
    """
    url = settings.url
    ensure_database(url)

    engine = create_gateway_engine(url, echo=settings.sql_echo)
    try:
        create_tables(engine)
    except SQLAlchemyError:
        engine.dispose()
        raise

    logger.info("database_provisioned", backend=url.get_backend_name(), database=url.database)
    return engine


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for database session injection.

    Sessions are bound to the engine stored on ``app.state`` at startup.

    Yields:
        Session: SQLAlchemy session for database operations

    Note:
        Session is automatically closed after request completes (finally block).
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Type alias for dependency injection
DBSession = Annotated[Session, Depends(get_db)]
