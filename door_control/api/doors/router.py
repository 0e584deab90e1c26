"""Door registry endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.doors.schemas import (
    DoorCreate,
    DoorDetail,
    DoorListItem,
    DoorRead,
    DoorUpdate,
)
from door_control.db.db import get_session
from door_control.services import doors as door_service
from door_control.utils.auth import RequireAuth

router = APIRouter(prefix="/doors", tags=["doors"], dependencies=[RequireAuth])


@router.get("", response_model=List[DoorListItem])
async def list_doors(session: AsyncSession = Depends(get_session)):
    """List all doors with their permissions and access attempt counts."""
    return await door_service.list_doors(session)


@router.get("/{door_id}", response_model=DoorDetail)
async def get_door(door_id: int, session: AsyncSession = Depends(get_session)):
    """Get one door with permissions and its 10 most recent access attempts."""
    return await door_service.get_door(session, door_id)


@router.post("", response_model=DoorRead, status_code=status.HTTP_201_CREATED)
async def create_door(data: DoorCreate, session: AsyncSession = Depends(get_session)):
    """Register a door. The clientId must be unique."""
    return await door_service.create_door(session, data)


@router.patch("/{door_id}", response_model=DoorRead)
async def update_door(door_id: int, data: DoorUpdate, session: AsyncSession = Depends(get_session)):
    return await door_service.update_door(session, door_id, data)


@router.delete("/{door_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_door(door_id: int, session: AsyncSession = Depends(get_session)):
    """Delete a door, its permissions and its access history."""
    await door_service.delete_door(session, door_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
