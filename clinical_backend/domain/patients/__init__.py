# Patients domain module
from clinical_backend.domain.patients.models import (
    Patient,
    PatientRecord,
    MedicalBackground,
    Specialty,
    DEFAULT_SPECIALTY,
)

__all__ = [
    "Patient",
    "PatientRecord",
    "MedicalBackground",
    "Specialty",
    "DEFAULT_SPECIALTY",
]
