from typing import Optional, List
from datetime import datetime, timezone
import uuid

from loguru import logger

from clinical_backend.core.config import settings
from clinical_backend.core.exceptions import ValidationError
from clinical_backend.domain.patients.models import Patient, Specialty, DEFAULT_SPECIALTY
from clinical_backend.domain.patients.repository import PatientRepository
from clinical_backend.api.v1.patients.schemas import PatientCreate


REQUIRED_FIELDS = (
    ("doctor_id", "doctorId"),
    ("first_name", "firstName"),
    ("last_name", "lastName"),
)


def build_id(prefix: str) -> str:
    """Build a record identifier such as ``pat-3f2a...``"""
    return f"{prefix}-{uuid.uuid4().hex}"


def _join_names(names: List[str]) -> str:
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def resolve_specialty(value: Optional[str]) -> Specialty:
    """Map the caller's specialty onto the enum; blank means the default.

    Matching ignores case and surrounding whitespace, so ``" Orthodontics"``
    is stored as the canonical ``"orthodontics"`` value rather than as typed.
    """
    if value is None or not value.strip():
        return DEFAULT_SPECIALTY

    normalized = value.strip().lower()
    for specialty in Specialty:
        if specialty.value == normalized:
            return specialty

    raise ValidationError(
        message=f"Unknown specialty: {value}",
        details={"field": "specialty", "value": value, "allowed": [s.value for s in Specialty]},
        error_code="INVALID_SPECIALTY"
    )


class PatientService:
    """Service layer for patient onboarding and lookup"""

    def __init__(self, repository: PatientRepository, id_prefix: Optional[str] = None):
        self.repository = repository
        self.id_prefix = id_prefix or settings.PATIENT_ID_PREFIX

    async def onboard(self, patient_data: PatientCreate) -> Patient:
        """Validate input, build a new patient record and persist it"""
        missing = [
            wire_name for field, wire_name in REQUIRED_FIELDS
            if not (getattr(patient_data, field) or "").strip()
        ]
        if missing:
            logger.warning(f"Rejected patient onboarding, missing fields: {missing}")
            raise ValidationError(
                message=f"{_join_names(missing)} {'is' if len(missing) == 1 else 'are'} required",
                details={"missing_fields": missing},
                error_code="MISSING_REQUIRED_FIELDS"
            )

        patient = Patient(
            id=build_id(self.id_prefix),
            doctor_id=patient_data.doctor_id,
            specialty=resolve_specialty(patient_data.specialty),
            first_name=patient_data.first_name,
            last_name=patient_data.last_name,
            document_id=patient_data.document_id or "",
            phone=patient_data.phone or "",
            email=patient_data.email or "",
            birth_date=patient_data.birth_date or "",
            medical_backgrounds=list(patient_data.medical_backgrounds),
            image_keys=list(patient_data.image_keys),
            created_at=datetime.now(timezone.utc),
        )

        created = await self.repository.create(patient)
        logger.info(f"Onboarded patient {created.id} for doctor {created.doctor_id}")
        return created

    async def get_by_id(self, patient_id: str) -> Patient:
        """Get patient by ID"""
        if not patient_id or not patient_id.strip():
            raise ValidationError(
                message="patient id required",
                details={"field": "id"},
                error_code="MISSING_PATIENT_ID"
            )
        return await self.repository.get_by_id(patient_id)

    async def list_by_doctor(self, doctor_id: Optional[str] = None) -> List[Patient]:
        """List a doctor's patients, or every patient when no doctor is given"""
        return await self.repository.list_by_doctor(doctor_id or None)

    async def search(self, query: str, doctor_id: Optional[str] = None) -> List[Patient]:
        """Search patients by name, document, email or phone"""
        if not query or not query.strip():
            raise ValidationError(
                message="query parameter 'q' is required",
                details={"field": "q"},
                error_code="MISSING_SEARCH_QUERY"
            )
        return await self.repository.search(query, doctor_id or None)
