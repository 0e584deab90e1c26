"""Tag registry, permission and validation endpoints."""

import time
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.tags.schemas import (
    PermissionRead,
    RemovedPermissions,
    TagCreate,
    TagDetail,
    TagRead,
    TagUpdate,
    ValidateTagRequest,
    ValidateTagResponse,
)
from door_control.config.logger import log_performance
from door_control.config.settings import settings
from door_control.db.db import get_session
from door_control.services import tags as tag_service
from door_control.services.access_validator import validate_tag_access
from door_control.utils.auth import RequireAuth

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post(
    "/validate",
    response_model=ValidateTagResponse,
    response_model_exclude_none=True,
    summary="Validate a tag presented at an edge device",
)
async def validate_access(
    body: ValidateTagRequest,
    request: Request,
    session: AsyncSession = Depends(get_session),
):
    """Decide whether the tag may open the door bound to the device.

    Unauthenticated: edge devices hold no operator credentials. Every attempt
    at a known door is written to the access history.
    """
    client_ip = None
    if settings.RECORD_CLIENT_IP and request.client:
        client_ip = request.client.host

    started = time.perf_counter()
    decision = await validate_tag_access(
        session,
        tag_id=body.tag_id,
        client_id=body.client_id,
        image=body.image,
        client_ip=client_ip,
    )
    log_performance("tag validation", time.perf_counter() - started, client_id=body.client_id)
    return ValidateTagResponse(allowed=decision.allowed, door_id=decision.door_id)


@router.get("", response_model=List[TagDetail], dependencies=[RequireAuth])
async def list_tags(session: AsyncSession = Depends(get_session)):
    """List all tags with the doors they are assigned to."""
    return await tag_service.list_tags(session)


@router.get("/{tag_pk}", response_model=TagDetail, dependencies=[RequireAuth])
async def get_tag(tag_pk: int, session: AsyncSession = Depends(get_session)):
    return await tag_service.get_tag(session, tag_pk)


@router.post("", response_model=TagRead, status_code=status.HTTP_201_CREATED, dependencies=[RequireAuth])
async def create_tag(data: TagCreate, session: AsyncSession = Depends(get_session)):
    """Register a tag. The tagId must be unique."""
    return await tag_service.create_tag(session, data)


@router.patch("/{tag_pk}", response_model=TagRead, dependencies=[RequireAuth])
async def update_tag(tag_pk: int, data: TagUpdate, session: AsyncSession = Depends(get_session)):
    return await tag_service.update_tag(session, tag_pk, data)


@router.delete("/{tag_pk}", status_code=status.HTTP_204_NO_CONTENT, dependencies=[RequireAuth])
async def delete_tag(tag_pk: int, session: AsyncSession = Depends(get_session)):
    await tag_service.delete_tag(session, tag_pk)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{tag_pk}/doors/{door_id}",
    response_model=PermissionRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[RequireAuth],
)
async def assign_to_door(tag_pk: int, door_id: int, session: AsyncSession = Depends(get_session)):
    """Grant the tag access to the door."""
    return await tag_service.assign_to_door(session, tag_pk, door_id)


@router.delete("/{tag_pk}/doors/{door_id}", response_model=RemovedPermissions, dependencies=[RequireAuth])
async def remove_from_door(tag_pk: int, door_id: int, session: AsyncSession = Depends(get_session)):
    """Revoke every permission linking the tag to the door."""
    removed = await tag_service.remove_from_door(session, tag_pk, door_id)
    return RemovedPermissions(count=removed)
