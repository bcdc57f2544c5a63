from sqlalchemy import Column, String, Text, JSON, DateTime, Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import List
from clinical_backend.infrastructure.database import Base
import enum


class Specialty(str, enum.Enum):
    """Practice area of the doctor who owns a patient record"""
    ODONTOLOGY = "odontology"
    ORTHODONTICS = "orthodontics"
    ENDODONTICS = "endodontics"
    PERIODONTICS = "periodontics"
    PEDIATRIC_DENTISTRY = "pediatric_dentistry"
    ORAL_SURGERY = "oral_surgery"
    GENERAL_MEDICINE = "general_medicine"


DEFAULT_SPECIALTY = Specialty.ODONTOLOGY


class MedicalBackground(BaseModel):
    """One entry of a patient's medical history, stored as given"""
    model_config = ConfigDict(frozen=True)

    type: str = ""
    description: str = ""


class Patient(BaseModel):
    """Patient record as created by onboarding and returned by lookups.

    Instances are immutable: ``id`` and ``created_at`` are stamped once when
    the record is built and never change afterwards.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    doctor_id: str
    specialty: Specialty = DEFAULT_SPECIALTY
    first_name: str
    last_name: str
    document_id: str = ""
    phone: str = ""
    email: str = ""
    birth_date: str = ""
    medical_backgrounds: List[MedicalBackground] = Field(default_factory=list)
    image_keys: List[str] = Field(default_factory=list)
    created_at: datetime

    def get_full_name(self) -> str:
        """Get patient's full name"""
        return " ".join(filter(None, [self.first_name, self.last_name]))


class PatientRecord(Base):
    """Table row backing the SQL patient repository"""
    __tablename__ = "patients"

    id = Column(String, primary_key=True)
    doctor_id = Column(String, nullable=False, index=True)
    specialty = Column(Enum(Specialty, values_callable=lambda e: [m.value for m in e]), nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    document_id = Column(Text, nullable=False, default="")
    phone = Column(Text, nullable=False, default="")
    email = Column(Text, nullable=False, default="")
    birth_date = Column(Text, nullable=False, default="")

    medical_backgrounds = Column(JSON, nullable=False, default=list)
    image_keys = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, patient: Patient) -> "PatientRecord":
        return cls(
            id=patient.id,
            doctor_id=patient.doctor_id,
            specialty=patient.specialty,
            first_name=patient.first_name,
            last_name=patient.last_name,
            document_id=patient.document_id,
            phone=patient.phone,
            email=patient.email,
            birth_date=patient.birth_date,
            medical_backgrounds=[bg.model_dump() for bg in patient.medical_backgrounds],
            image_keys=list(patient.image_keys),
            created_at=patient.created_at,
        )

    def to_domain(self) -> Patient:
        created_at = self.created_at
        # SQLite drops the offset on the way back
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)

        return Patient(
            id=self.id,
            doctor_id=self.doctor_id,
            specialty=self.specialty,
            first_name=self.first_name,
            last_name=self.last_name,
            document_id=self.document_id or "",
            phone=self.phone or "",
            email=self.email or "",
            birth_date=self.birth_date or "",
            medical_backgrounds=[MedicalBackground(**bg) for bg in (self.medical_backgrounds or [])],
            image_keys=list(self.image_keys or []),
            created_at=created_at,
        )
