"""Pydantic models for API request/response schemas.

These models define the API contracts between clients and the gateway.
Field names on the wire are camelCase (``dateOfBirth``, ``affectedRows``)
to match what existing clients send and read.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Raw SQL Schemas
# ============================================================================


class SelectResponse(BaseModel):
    """Rows returned by a SELECT-class statement."""

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(True, description="Always true on success")
    rows: list[dict[str, Any]] = Field(..., description="Row set, one mapping of column to value per row")


class InsertResponse(BaseModel):
    """Outcome of an INSERT-class statement."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    ok: bool = Field(True, description="Always true on success")
    affected_rows: int = Field(..., alias="affectedRows", description="Rows affected by the statement")
    insert_id: Optional[int] = Field(
        None, alias="insertId", description="Identity assigned by the store, if any"
    )


class ErrorResponse(BaseModel):
    """Error envelope used by every failure response."""

    error: str = Field(..., description="Human-readable error message")


# ============================================================================
# Patient Schemas
# ============================================================================


class PatientCreate(BaseModel):
    """Request to create a patient record."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., max_length=100, description="Patient name")
    date_of_birth: datetime = Field(..., alias="dateOfBirth", description="Date of birth (ISO 8601)")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def parse_date_of_birth(cls, value: Any) -> Any:
        # Accepts bare dates ("2000-01-01") as midnight
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        return value

    @field_validator("date_of_birth")
    @classmethod
    def store_as_naive_utc(cls, value: datetime) -> datetime:
        # DATETIME columns carry no zone
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class PatientRecord(BaseModel):
    """One stored patient record."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Identity assigned by the store")
    name: Optional[str] = Field(None, description="Patient name")
    date_of_birth: Optional[datetime] = Field(None, alias="dateOfBirth", description="Date of birth")


class PatientCreated(BaseModel):
    """Response after creating a patient record."""

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(True, description="Always true on success")
    id: int = Field(..., description="Identity assigned to the new record")
