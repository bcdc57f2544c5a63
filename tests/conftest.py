import pytest
from typing import AsyncGenerator
from unittest.mock import AsyncMock
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from clinical_backend.main import app
from clinical_backend.api.deps import get_patient_repository
from clinical_backend.infrastructure.database import Base
from clinical_backend.domain.patients.repository import (
    PatientRepository,
    InMemoryPatientRepository,
    SqlPatientRepository,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
def memory_repository() -> InMemoryPatientRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryPatientRepository()


@pytest.fixture(scope="function")
def mock_repository() -> AsyncMock:
    """Repository double that echoes created records back."""
    repository = AsyncMock(spec=PatientRepository)
    repository.create.side_effect = lambda patient: patient
    return repository


@pytest.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh SQLite database session for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()

    await engine.dispose()


@pytest.fixture(scope="function")
def sql_repository(db_session: AsyncSession) -> SqlPatientRepository:
    return SqlPatientRepository(db_session)


@pytest.fixture(scope="function")
async def client(memory_repository: InMemoryPatientRepository) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client backed by an isolated in-memory repository."""

    async def override_get_patient_repository():
        yield memory_repository

    app.dependency_overrides[get_patient_repository] = override_get_patient_repository

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def sample_patient_data() -> dict:
    """Sample onboarding payload for testing."""
    return {
        "doctorId": "doc1",
        "firstName": "Ana",
        "lastName": "Gomez",
        "documentId": "CC-1020304050",
        "phone": "300 123 4567",
        "email": "ana.gomez@example.com",
        "birthDate": "1990-04-12",
        "medicalBackgrounds": [
            {"type": "allergy", "description": "Penicillin"},
            {"type": "condition", "description": "Hypertension"},
        ],
        "imageKeys": ["patients/doc1/xray-1.png"],
    }
