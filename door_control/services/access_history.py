"""Access history reader: paginated listings, statistics and row deletion."""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.access_history.schemas import AccessHistoryRead, AccessStats, HistoryDoor
from door_control.db import crud
from door_control.models.access_history import AccessHistory
from door_control.models.door import Door
from door_control.utils.responses import PaginatedResponse, paginated_response


async def _paginate(
    session: AsyncSession,
    page: int,
    limit: int,
    criterion: Optional[Any] = None,
) -> PaginatedResponse[AccessHistoryRead]:
    criteria = [] if criterion is None else [criterion]
    stmt = (
        select(AccessHistory, Door)
        .join(Door, Door.id == AccessHistory.door_id, isouter=True)
        .where(*criteria)
        .order_by(AccessHistory.timestamp.desc(), AccessHistory.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )

    result = await session.execute(stmt)
    rows = [
        AccessHistoryRead.model_validate(
            {
                **entry.model_dump(),
                "door": HistoryDoor.model_validate(door) if door is not None else None,
            }
        )
        for entry, door in result.all()
    ]
    total = await crud.count(session, AccessHistory, *criteria)
    return paginated_response(rows, page=page, limit=limit, total=total)


async def list_history(session: AsyncSession, page: int, limit: int) -> PaginatedResponse[AccessHistoryRead]:
    """All attempts, newest first."""
    return await _paginate(session, page, limit)


async def list_history_by_door(
    session: AsyncSession, door_id: int, page: int, limit: int
) -> PaginatedResponse[AccessHistoryRead]:
    return await _paginate(session, page, limit, AccessHistory.door_id == door_id)


async def list_history_by_tag(
    session: AsyncSession, tag_id: str, page: int, limit: int
) -> PaginatedResponse[AccessHistoryRead]:
    return await _paginate(session, page, limit, AccessHistory.tag_id == tag_id)


async def get_stats(session: AsyncSession) -> AccessStats:
    total = await crud.count(session, AccessHistory)
    successful = await crud.count(session, AccessHistory, AccessHistory.access_granted == True)  # noqa: E712
    failed = await crud.count(session, AccessHistory, AccessHistory.access_granted == False)  # noqa: E712
    return AccessStats(
        total_access=total,
        successful_access=successful,
        failed_access=failed,
        success_rate=(successful / total) * 100 if total > 0 else 0,
    )


async def delete_entry(session: AsyncSession, entry_id: int) -> None:
    await crud.delete_by_id(session, AccessHistory, entry_id, "Access history entry")
