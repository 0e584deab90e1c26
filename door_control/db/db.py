"""Database connection management using SQLModel with async SQLAlchemy."""

from typing import AsyncGenerator, Optional
from urllib.parse import urlparse, urlunparse

from contextlib import asynccontextmanager

from fastapi import HTTPException, status
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from door_control.config.settings import settings
from door_control.config.logger import app_logger

_engine: Optional[AsyncEngine] = None
_session_maker: Optional[async_sessionmaker] = None


def get_db_url() -> str:
    """Get database URL for SQLAlchemy with an async driver."""
    db_url = settings.effective_database_url
    if not db_url:
        raise ValueError("DATABASE_URL not configured")
    if db_url.startswith("sqlite"):
        if db_url.startswith("sqlite://"):
            db_url = db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return db_url

    # asyncpg does not understand sslmode in the query string
    parsed = urlparse(db_url)
    query_parts = [p for p in parsed.query.split("&") if not p.startswith("sslmode=") and p]
    clean_url = urlunparse(
        (
            parsed.scheme,
            parsed.netloc,
            parsed.path,
            parsed.params,
            "&".join(query_parts),
            parsed.fragment,
        )
    )

    if clean_url.startswith("postgresql://"):
        clean_url = clean_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif clean_url.startswith("postgres://"):
        clean_url = clean_url.replace("postgres://", "postgresql+asyncpg://", 1)

    return clean_url


async def init_db() -> None:
    """Initialize the database engine and create tables."""
    global _engine, _session_maker

    try:
        db_url = get_db_url()
        app_logger.info("Initializing database connection")

        engine_kwargs = {"echo": False}
        if not db_url.startswith("sqlite"):
            engine_kwargs.update(pool_size=20, max_overflow=0)

        _engine = create_async_engine(db_url, **engine_kwargs)

        _session_maker = async_sessionmaker(
            _engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        # Import all models to register them with SQLModel
        from door_control import models  # noqa: F401

        async with _engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        app_logger.info("Database initialized successfully")

    except ValueError:
        app_logger.warning("DATABASE_URL not set; database will not be initialized")
    except Exception as e:
        app_logger.error(f"Failed to initialize database: {e}")
        app_logger.error(f"Error type: {type(e).__name__}")
        app_logger.warning("DATABASE CONNECTION FAILED - API endpoints will answer 503")


async def close_db() -> None:
    """Close the database engine."""
    global _engine, _session_maker

    if _engine:
        await _engine.dispose()
        _engine = None
        _session_maker = None
        app_logger.info("Database connection closed")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session."""
    if not _session_maker:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable. Check DATABASE_URL and the server logs.",
        )

    async with _session_maker() as session:
        yield session


@asynccontextmanager
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Async context manager for scripts and startup tasks."""
    if not _session_maker:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with _session_maker() as session:
        yield session


async def ping_database() -> tuple[bool, str]:
    """Run a lightweight health query against the database."""
    if not _engine or not _session_maker:
        return False, "Database not initialized"

    try:
        async with _session_maker() as session:
            result = await session.execute(text("SELECT 1"))
            row = result.scalar()
            if row == 1:
                return True, "Database connection healthy"
            return False, f"Unexpected response: {row}"
    except Exception as e:
        return False, f"Database query failed: {str(e)}"
