"""Patient resource API routes.

Endpoints:
- GET /patients - List all patient records, oldest identity first
- POST /patients - Create a patient record
"""

import structlog
from fastapi import APIRouter

from sql_gateway.api.db.database import DBSession
from sql_gateway.api.models import database as db_models
from sql_gateway.api.models import schemas

logger = structlog.get_logger(__name__)

router = APIRouter()


def to_record(patient: db_models.Patient) -> schemas.PatientRecord:
    return schemas.PatientRecord(
        id=patient.id,
        name=patient.name,
        date_of_birth=patient.date_of_birth,
    )


# ============================================================================
# GET /patients - List Patients
# ============================================================================


@router.get("/patients", response_model=list[schemas.PatientRecord])
def list_patients(db: DBSession) -> list[schemas.PatientRecord]:
    """List every patient record ordered by ascending identity.

    Example:
        GET /patients

        Response (200):
        [
            {"id": 1, "name": "Alice", "dateOfBirth": "2000-01-01T00:00:00"},
            {"id": 2, "name": "Bob", "dateOfBirth": "1999-05-17T00:00:00"}
        ]
    """
    patients = db.query(db_models.Patient).order_by(db_models.Patient.id.asc()).all()
    return [to_record(p) for p in patients]


# ============================================================================
# POST /patients - Create Patient
# ============================================================================


@router.post(
    "/patients",
    response_model=schemas.PatientCreated,
    responses={400: {"model": schemas.ErrorResponse, "description": "Missing or invalid field"}},
)
def create_patient(request: schemas.PatientCreate, db: DBSession) -> schemas.PatientCreated:
    """Create a patient record.

    Both ``name`` and ``dateOfBirth`` are required.

    Example:
        POST /patients
        {"name": "Alice", "dateOfBirth": "2000-01-01"}

        Response (200):
        {"ok": true, "id": 1}
    """
    patient = db_models.Patient(name=request.name, date_of_birth=request.date_of_birth)

    db.add(patient)
    db.commit()
    db.refresh(patient)

    logger.info("patient_created", patient_id=patient.id)
    return schemas.PatientCreated(id=patient.id)
