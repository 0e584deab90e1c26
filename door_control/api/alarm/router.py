"""Tamper/alarm endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.alarm.schemas import (
    ReportTamperRequest,
    ReportTamperResponse,
    ResolveTamperLogRequest,
    TamperLogRead,
    TamperStatistics,
    UpdateTamperLogRequest,
)
from door_control.db.db import get_session
from door_control.services import alarm as alarm_service
from door_control.utils.auth import RequireAuth

router = APIRouter(prefix="/alarm", tags=["alarm"])


@router.post("/tamper", response_model=ReportTamperResponse, status_code=status.HTTP_201_CREATED)
async def report_tamper(report: ReportTamperRequest, session: AsyncSession = Depends(get_session)):
    """Record a tamper event reported by an edge device (unauthenticated)."""
    tamper_log = await alarm_service.report_tamper(session, report)
    return ReportTamperResponse(message="Tamper attempt logged successfully", log_id=tamper_log.id)


@router.get("/tamper", response_model=List[TamperLogRead], dependencies=[RequireAuth])
async def list_tamper_logs(
    unresolved: bool = Query(False, description="Only return unresolved logs"),
    session: AsyncSession = Depends(get_session),
):
    return await alarm_service.list_tamper_logs(session, unresolved_only=unresolved)


@router.get("/tamper/statistics", response_model=TamperStatistics, dependencies=[RequireAuth])
async def get_statistics(session: AsyncSession = Depends(get_session)):
    return await alarm_service.get_statistics(session)


@router.get("/tamper/client/{client_id}", response_model=List[TamperLogRead], dependencies=[RequireAuth])
async def list_by_client(client_id: str, session: AsyncSession = Depends(get_session)):
    return await alarm_service.list_by_client(session, client_id)


@router.get("/tamper/{log_id}", response_model=TamperLogRead, dependencies=[RequireAuth])
async def get_tamper_log(log_id: int, session: AsyncSession = Depends(get_session)):
    return await alarm_service.get_tamper_log(session, log_id)


@router.patch("/tamper/{log_id}", response_model=TamperLogRead, dependencies=[RequireAuth])
async def update_tamper_log(
    log_id: int,
    data: UpdateTamperLogRequest,
    session: AsyncSession = Depends(get_session),
):
    """Patch resolved/notes. A resolved log cannot be set back to unresolved."""
    return await alarm_service.update_tamper_log(session, log_id, data)


@router.patch("/tamper/{log_id}/resolve", response_model=TamperLogRead, dependencies=[RequireAuth])
async def resolve_tamper_log(
    log_id: int,
    data: Optional[ResolveTamperLogRequest] = Body(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Mark the log resolved, replacing its notes."""
    notes = data.notes if data else None
    return await alarm_service.resolve_tamper_log(session, log_id, notes)


@router.delete("/tamper/{log_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[RequireAuth])
async def delete_tamper_log(log_id: int, session: AsyncSession = Depends(get_session)):
    await alarm_service.delete_tamper_log(session, log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
