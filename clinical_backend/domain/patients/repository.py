import asyncio
from typing import Dict, List, Optional, Protocol, runtime_checkable

from sqlalchemy import String, select, or_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from clinical_backend.core.exceptions import NotFoundError, handle_database_error
from clinical_backend.domain.patients.models import Patient, PatientRecord


@runtime_checkable
class PatientRepository(Protocol):
    """Storage capability consumed by PatientService.

    ``create`` must persist before returning and may hand back an enriched
    copy. ``get_by_id`` raises NotFoundError when nothing matches.
    """

    async def create(self, patient: Patient) -> Patient: ...

    async def get_by_id(self, patient_id: str) -> Patient: ...

    async def list_by_doctor(self, doctor_id: Optional[str] = None) -> List[Patient]: ...

    async def search(self, query: str, doctor_id: Optional[str] = None) -> List[Patient]: ...


def _patient_not_found(patient_id: str) -> NotFoundError:
    return NotFoundError(
        message="Patient not found",
        details={"patient_id": patient_id},
        error_code="PATIENT_NOT_FOUND"
    )


def _matches(patient: Patient, query: str) -> bool:
    q = query.strip().lower()
    if not q:
        return True
    return (
        q in patient.first_name.lower()
        or q in patient.last_name.lower()
        or q in patient.get_full_name().lower()
        or q in patient.document_id.lower()
        or q in patient.email.lower()
        or q.replace(" ", "") in patient.phone.replace(" ", "").lower()
    )


class InMemoryPatientRepository:
    """Process-local patient store used for local development and tests"""

    def __init__(self):
        self._items: Dict[str, Patient] = {}
        self._lock = asyncio.Lock()

    async def create(self, patient: Patient) -> Patient:
        async with self._lock:
            self._items[patient.id] = patient
        return patient

    async def get_by_id(self, patient_id: str) -> Patient:
        async with self._lock:
            patient = self._items.get(patient_id)
        if patient is None:
            raise _patient_not_found(patient_id)
        return patient

    async def list_by_doctor(self, doctor_id: Optional[str] = None) -> List[Patient]:
        async with self._lock:
            patients = [
                p for p in self._items.values()
                if not doctor_id or p.doctor_id == doctor_id
            ]
        return sorted(patients, key=lambda p: p.created_at, reverse=True)

    async def search(self, query: str, doctor_id: Optional[str] = None) -> List[Patient]:
        patients = await self.list_by_doctor(doctor_id)
        return [p for p in patients if _matches(p, query)]


class SqlPatientRepository:
    """Repository for patient data access through SQLAlchemy"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, patient: Patient) -> Patient:
        """Insert a new patient row"""
        record = PatientRecord.from_domain(patient)
        try:
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "create patient") from e

        return record.to_domain()

    async def get_by_id(self, patient_id: str) -> Patient:
        """Get patient by ID"""
        try:
            result = await self.db.execute(
                select(PatientRecord).where(PatientRecord.id == patient_id)
            )
            record = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise handle_database_error(e, "get patient") from e

        if record is None:
            raise _patient_not_found(patient_id)
        return record.to_domain()

    async def list_by_doctor(self, doctor_id: Optional[str] = None) -> List[Patient]:
        """Get patients of a doctor, newest first; all patients when no doctor is given"""
        query = select(PatientRecord)
        if doctor_id:
            query = query.where(PatientRecord.doctor_id == doctor_id)
        query = query.order_by(PatientRecord.created_at.desc())

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "list patients") from e
        return [record.to_domain() for record in result.scalars().all()]

    async def search(self, query: str, doctor_id: Optional[str] = None) -> List[Patient]:
        """Search patients by name, document, email or phone"""
        q = query.strip()
        stmt = select(PatientRecord)
        if doctor_id:
            stmt = stmt.where(PatientRecord.doctor_id == doctor_id)
        if q:
            # autoescape makes % and _ in the query match literally
            stmt = stmt.where(
                or_(
                    PatientRecord.first_name.icontains(q, autoescape=True),
                    PatientRecord.last_name.icontains(q, autoescape=True),
                    (PatientRecord.first_name + " " + PatientRecord.last_name).icontains(q, autoescape=True),
                    PatientRecord.document_id.icontains(q, autoescape=True),
                    PatientRecord.email.icontains(q, autoescape=True),
                    func.replace(PatientRecord.phone, " ", "", type_=String).icontains(q.replace(" ", ""), autoescape=True),
                )
            )
        stmt = stmt.order_by(PatientRecord.created_at.desc())

        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise handle_database_error(e, "search patients") from e
        return [record.to_domain() for record in result.scalars().all()]
