"""
Pytest configuration and fixtures for SQL gateway tests.
"""

import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(scope="session")
def project_root():
    """Return project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def test_engine():
    """Create an in-memory SQLite engine with the patient table.

    StaticPool shares one connection, so every checkout (including from
    threadpool workers) sees the same in-memory database.
    """
    from sql_gateway.api.models.database import Base

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Cleanup
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def make_settings():
    """Factory for Settings pointing at SQLite, with overrides."""
    from sql_gateway.config import Settings

    def _make(**overrides):
        values = {"database_url": "sqlite://", "cors_enabled": True, "variant": "all"}
        values.update(overrides)
        return Settings(**values)

    return _make
