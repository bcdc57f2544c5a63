from typing import AsyncGenerator

from fastapi import Depends

from clinical_backend.core.config import settings
from clinical_backend.infrastructure.database import AsyncSessionLocal
from clinical_backend.domain.patients.repository import (
    PatientRepository,
    InMemoryPatientRepository,
    SqlPatientRepository,
)
from clinical_backend.domain.patients.service import PatientService

# shared by every request when PERSISTENCE_BACKEND=memory
memory_patient_repository = InMemoryPatientRepository()


async def get_patient_repository() -> AsyncGenerator[PatientRepository, None]:
    if settings.PERSISTENCE_BACKEND == "sql":
        async with AsyncSessionLocal() as session:
            yield SqlPatientRepository(session)
    else:
        yield memory_patient_repository


def get_patient_service(
    repository: PatientRepository = Depends(get_patient_repository),
) -> PatientService:
    return PatientService(repository)
