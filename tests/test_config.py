from clinical_backend.api.deps import get_patient_repository, memory_patient_repository
from clinical_backend.core import exceptions
from clinical_backend.core.config import Settings, settings
from clinical_backend.infrastructure import database


def test_postgres_url_uses_asyncpg() -> None:
    settings = Settings(DATABASE_URL="postgresql://u:p@db:5432/clinical?sslmode=require")

    assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5432/clinical?ssl=require"


def test_plain_sqlite_url_uses_aiosqlite() -> None:
    settings = Settings(DATABASE_URL="sqlite:///./local.db")

    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./local.db"


def test_cors_origins_from_comma_list() -> None:
    settings = Settings(BACKEND_CORS_ORIGINS="http://localhost:5173, https://app.example.com")

    assert [str(o).rstrip("/") for o in settings.BACKEND_CORS_ORIGINS] == [
        "http://localhost:5173",
        "https://app.example.com",
    ]


def test_memory_persistence_is_default() -> None:
    assert Settings().PERSISTENCE_BACKEND == "memory"


async def test_memory_backend_serves_shared_repository(monkeypatch) -> None:
    monkeypatch.setattr(settings, "PERSISTENCE_BACKEND", "memory")

    first = [repo async for repo in get_patient_repository()]
    second = [repo async for repo in get_patient_repository()]

    assert first == [memory_patient_repository]
    assert second[0] is first[0]


def test_removed_settings_and_helpers_stay_gone() -> None:
    assert "ENVIRONMENT" not in Settings.model_fields
    assert not hasattr(exceptions, "ErrorResponse")
    assert not hasattr(database, "get_db")
