import asyncio
import os
import sys

# Add project root to python path
sys.path.append(os.getcwd())

from clinical_backend.core.exceptions import NotFoundError, ValidationError
from clinical_backend.infrastructure.database import AsyncSessionLocal, init_db, close_db
from clinical_backend.domain.patients.repository import SqlPatientRepository
from clinical_backend.domain.patients.service import PatientService
from clinical_backend.api.v1.patients.schemas import PatientCreate

async def run_workflow():
    print("Initializing database...")
    await init_db()

    try:
        async with AsyncSessionLocal() as db:
            service = PatientService(SqlPatientRepository(db))

            print("\n--- 1. Onboard Patient ---")
            patient = await service.onboard(PatientCreate(
                doctorId="doc-verify",
                firstName="Ana",
                lastName="Gomez",
                phone="300 123 4567",
                medicalBackgrounds=[{"type": "allergy", "description": "Penicillin"}],
            ))
            print(f"Created {patient.id} ({patient.specialty.value}) at {patient.created_at.isoformat()}")

            print("\n--- 2. Lookup ---")
            fetched = await service.get_by_id(patient.id)
            assert fetched.id == patient.id
            print(f"Found {fetched.get_full_name()}")

            print("\n--- 3. Search ---")
            results = await service.search("3001234567", "doc-verify")
            print(f"Search returned {len(results)} patient(s)")

            print("\n--- 4. Rejections ---")
            try:
                await service.onboard(PatientCreate(doctorId="doc-verify"))
            except ValidationError as e:
                print(f"Validation: {e.message}")
            try:
                await service.get_by_id("pat-missing")
            except NotFoundError as e:
                print(f"Lookup: {e.message}")

            print("\nWorkflow verified.")
    finally:
        await close_db()

if __name__ == "__main__":
    asyncio.run(run_workflow())
