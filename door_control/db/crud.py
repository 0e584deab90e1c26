"""Generic database helpers shared by the services.

All deletes go through Core ``DELETE`` statements so no ORM relationship
loading is triggered inside the async session.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from door_control.config.logger import app_logger
from door_control.utils.errors import ConflictError, NotFoundError

M = TypeVar("M", bound=SQLModel)


async def get_or_404(session: AsyncSession, model: Type[M], record_id: int, resource: str) -> M:
    """Load a row by primary key or raise NotFoundError."""
    record = await session.get(model, record_id)
    if record is None:
        raise NotFoundError(resource, record_id)
    return record


async def commit_or_conflict(session: AsyncSession, conflict_message: str) -> None:
    """Commit, translating unique-constraint violations into ConflictError."""
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        app_logger.warning(f"Integrity error: {e.orig}")
        raise ConflictError(conflict_message) from e


async def insert(session: AsyncSession, record: M, conflict_message: str) -> M:
    session.add(record)
    await commit_or_conflict(session, conflict_message)
    await session.refresh(record)
    return record


async def patch(
    session: AsyncSession,
    record: M,
    changes: Dict[str, Any],
    conflict_message: str,
) -> M:
    """Apply a partial update; rows with an updated_at column get it bumped."""
    for field, value in changes.items():
        setattr(record, field, value)
    if hasattr(record, "updated_at"):
        record.updated_at = datetime.now(timezone.utc)
    session.add(record)
    await commit_or_conflict(session, conflict_message)
    await session.refresh(record)
    return record


async def delete_by_id(session: AsyncSession, model: Type[M], record_id: int, resource: str) -> None:
    """Hard delete one row; raise NotFoundError when nothing was deleted."""
    result = await session.execute(delete(model).where(model.id == record_id))
    if result.rowcount == 0:
        await session.rollback()
        raise NotFoundError(resource, record_id)
    await session.commit()


async def count(session: AsyncSession, model: Type[M], *criteria: Any) -> int:
    stmt = select(func.count()).select_from(model)
    if criteria:
        stmt = stmt.where(*criteria)
    result = await session.execute(stmt)
    return result.scalar_one()


async def first(session: AsyncSession, model: Type[M], *criteria: Any) -> Optional[M]:
    result = await session.execute(select(model).where(*criteria).limit(1))
    return result.scalars().first()
