"""SQLAlchemy ORM models for database persistence.

Defines the one fixed table this service provisions. Uses SQLAlchemy 2.0
declarative mapping with type annotations.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Patient(Base):
    """Patient table.

    Rows are created through ``POST /patients`` or a raw INSERT and are never
    updated or deleted by this service. The identity column is named
    ``patientid`` in the store and exposed as ``id``.
    """

    __tablename__ = "patient"
    __table_args__ = {"mysql_engine": "InnoDB", "sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column("patientid", Integer, primary_key=True, autoincrement=True)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date_of_birth: Mapped[Optional[datetime]] = mapped_column("dateOfBirth", DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<Patient(id={self.id!r}, name={self.name!r})>"
