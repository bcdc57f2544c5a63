from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List

from clinical_backend.domain.patients.models import MedicalBackground, Patient


class PatientCreate(BaseModel):
    """Onboarding payload.

    Required fields are checked by PatientService rather than here so that
    the caller gets one error naming every missing field. ``specialty`` is
    None when the caller did not pick one. Any ``id`` sent by the caller is
    ignored.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    doctor_id: Optional[str] = None
    specialty: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    document_id: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    birth_date: Optional[str] = None
    medical_backgrounds: List[MedicalBackground] = Field(default_factory=list)
    image_keys: List[str] = Field(default_factory=list)


class PatientListResponse(BaseModel):
    """Schema for patient list and search responses"""
    items: List[Patient]
    total: int
