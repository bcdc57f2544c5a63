import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base
from clinical_backend.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    """Create the async engine; SQLite gets no pool sizing.

    Bound parameters are kept out of error messages since they carry
    patient contact data.
    """
    if "sqlite" in database_url.lower():
        return create_async_engine(
            database_url,
            echo=settings.DEBUG,
            hide_parameters=True,
            connect_args={"check_same_thread": False}
        )
    return create_async_engine(
        database_url,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=settings.DEBUG,
        hide_parameters=True
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)

# Base model
Base = declarative_base()


async def init_db():
    """Initialize database tables"""
    # registers PatientRecord on Base.metadata
    from clinical_backend.domain.patients import models  # noqa: F401

    logger.info("Creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database connections"""
    await engine.dispose()
