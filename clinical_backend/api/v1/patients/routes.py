from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from clinical_backend.api.deps import get_patient_service
from clinical_backend.api.v1.patients.schemas import PatientCreate, PatientListResponse
from clinical_backend.domain.patients.models import Patient
from clinical_backend.domain.patients.service import PatientService

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("/onboard", response_model=Patient, status_code=status.HTTP_201_CREATED)
async def onboard_patient(
    patient_data: PatientCreate,
    patient_service: PatientService = Depends(get_patient_service)
):
    """Create a new patient record"""
    return await patient_service.onboard(patient_data)


@router.get("", response_model=PatientListResponse, status_code=status.HTTP_200_OK)
async def list_patients(
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    patient_service: PatientService = Depends(get_patient_service)
):
    """List patients, optionally restricted to one doctor"""
    patients = await patient_service.list_by_doctor(doctor_id)
    return PatientListResponse(items=patients, total=len(patients))


@router.get("/search", response_model=PatientListResponse, status_code=status.HTTP_200_OK)
async def search_patients(
    q: Optional[str] = None,
    doctor_id: Optional[str] = Query(None, alias="doctorId"),
    patient_service: PatientService = Depends(get_patient_service)
):
    """Search patients by name, document, email or phone"""
    patients = await patient_service.search(q or "", doctor_id)
    return PatientListResponse(items=patients, total=len(patients))


@router.get("/{patient_id}", response_model=Patient, status_code=status.HTTP_200_OK)
async def get_patient(
    patient_id: str,
    patient_service: PatientService = Depends(get_patient_service)
):
    """Get patient by ID"""
    return await patient_service.get_by_id(patient_id)
