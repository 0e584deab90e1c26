"""Access history endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.access_history.schemas import AccessHistoryRead, AccessStats
from door_control.config.settings import settings
from door_control.db.db import get_session
from door_control.services import access_history as history_service
from door_control.utils.auth import RequireAuth
from door_control.utils.responses import PaginatedResponse

router = APIRouter(prefix="/access-history", tags=["access-history"], dependencies=[RequireAuth])

PageQuery = Query(1, ge=1, description="1-based page number")
LimitQuery = Query(settings.HISTORY_PAGE_SIZE, ge=1, le=1000, description="Rows per page")


@router.get("", response_model=PaginatedResponse[AccessHistoryRead])
async def list_history(
    page: int = PageQuery,
    limit: int = LimitQuery,
    session: AsyncSession = Depends(get_session),
):
    """All access attempts, newest first."""
    return await history_service.list_history(session, page, limit)


@router.get("/stats", response_model=AccessStats)
async def get_stats(session: AsyncSession = Depends(get_session)):
    """Totals of granted and denied attempts and the success rate in percent."""
    return await history_service.get_stats(session)


@router.get("/door/{door_id}", response_model=PaginatedResponse[AccessHistoryRead])
async def list_history_by_door(
    door_id: int,
    page: int = PageQuery,
    limit: int = LimitQuery,
    session: AsyncSession = Depends(get_session),
):
    return await history_service.list_history_by_door(session, door_id, page, limit)


@router.get("/tag/{tag_id}", response_model=PaginatedResponse[AccessHistoryRead])
async def list_history_by_tag(
    tag_id: str,
    page: int = PageQuery,
    limit: int = LimitQuery,
    session: AsyncSession = Depends(get_session),
):
    """Attempts made with a tag string, including tags that were never registered."""
    return await history_service.list_history_by_tag(session, tag_id, page, limit)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(entry_id: int, session: AsyncSession = Depends(get_session)):
    await history_service.delete_entry(session, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
