"""Tamper/alarm workflow.

A tamper log is either unresolved or resolved. Operators can resolve a log
(repeatedly, each time overwriting the notes) but cannot reopen it.
"""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.alarm.schemas import (
    ReportTamperRequest,
    TamperStatistics,
    UpdateTamperLogRequest,
)
from door_control.config.logger import app_logger
from door_control.db import crud
from door_control.models.tamper_log import TamperLog, TamperState
from door_control.utils.errors import InvalidTransitionError


def _event_time(epoch_ms: Optional[int]) -> datetime:
    if epoch_ms is None:
        return datetime.now(timezone.utc)
    return datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)


async def report_tamper(session: AsyncSession, report: ReportTamperRequest) -> TamperLog:
    app_logger.warning(f"Tamper attempt reported from client: {report.client_id} (type: {report.type})")

    tamper_log = await crud.insert(
        session,
        TamperLog(
            client_id=report.client_id,
            image=report.image,
            timestamp=_event_time(report.timestamp),
        ),
        "Tamper log could not be stored",
    )
    app_logger.info(f"Tamper log created with ID: {tamper_log.id}")
    return tamper_log


async def _list(session: AsyncSession, *criteria) -> List[TamperLog]:
    stmt = select(TamperLog).order_by(TamperLog.timestamp.desc(), TamperLog.id.desc())
    if criteria:
        stmt = stmt.where(*criteria)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_tamper_logs(session: AsyncSession, unresolved_only: bool = False) -> List[TamperLog]:
    if unresolved_only:
        return await _list(session, TamperLog.resolved == False)  # noqa: E712
    return await _list(session)


async def list_by_client(session: AsyncSession, client_id: str) -> List[TamperLog]:
    return await _list(session, TamperLog.client_id == client_id)


async def get_tamper_log(session: AsyncSession, log_id: int) -> TamperLog:
    return await crud.get_or_404(session, TamperLog, log_id, "Tamper log")


async def update_tamper_log(
    session: AsyncSession, log_id: int, data: UpdateTamperLogRequest
) -> TamperLog:
    tamper_log = await crud.get_or_404(session, TamperLog, log_id, "Tamper log")
    changes = data.model_dump(exclude_unset=True)

    if changes.get("resolved") is False and tamper_log.state is TamperState.RESOLVED:
        raise InvalidTransitionError(f"Tamper log {log_id} is resolved and cannot be reopened")
    if changes.get("resolved") is None:
        changes.pop("resolved", None)

    return await crud.patch(session, tamper_log, changes, "Tamper log could not be updated")


async def resolve_tamper_log(
    session: AsyncSession, log_id: int, notes: Optional[str] = None
) -> TamperLog:
    """Mark a log resolved and overwrite its notes."""
    tamper_log = await crud.get_or_404(session, TamperLog, log_id, "Tamper log")
    tamper_log = await crud.patch(
        session,
        tamper_log,
        {"resolved": True, "notes": notes},
        "Tamper log could not be updated",
    )
    app_logger.info(f"Tamper log {log_id} resolved")
    return tamper_log


async def delete_tamper_log(session: AsyncSession, log_id: int) -> None:
    await crud.delete_by_id(session, TamperLog, log_id, "Tamper log")


async def get_statistics(session: AsyncSession) -> TamperStatistics:
    return TamperStatistics(
        total=await crud.count(session, TamperLog),
        unresolved=await crud.count(session, TamperLog, TamperLog.resolved == False),  # noqa: E712
        resolved=await crud.count(session, TamperLog, TamperLog.resolved == True),  # noqa: E712
    )
