"""Door registry service."""

from typing import Dict, List

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.doors.schemas import (
    DoorAccessEntry,
    DoorCreate,
    DoorDetail,
    DoorListItem,
    DoorPermissionWithTag,
    DoorRead,
    DoorUpdate,
    TagSummary,
)
from door_control.config.logger import app_logger
from door_control.db import crud
from door_control.models.access_history import AccessHistory
from door_control.models.door import Door
from door_control.models.door_permission import DoorPermission
from door_control.models.nfc_tag import NfcTag

RECENT_HISTORY_LIMIT = 10


def _conflict_message(client_id: str) -> str:
    return f"A door with clientId '{client_id}' already exists"


async def _permissions_by_door(
    session: AsyncSession, door_ids: List[int]
) -> Dict[int, List[DoorPermissionWithTag]]:
    grouped: Dict[int, List[DoorPermissionWithTag]] = {door_id: [] for door_id in door_ids}
    if not door_ids:
        return grouped

    result = await session.execute(
        select(DoorPermission, NfcTag)
        .join(NfcTag, NfcTag.id == DoorPermission.tag_id)
        .where(DoorPermission.door_id.in_(door_ids))
        .order_by(DoorPermission.id)
    )
    for permission, tag in result.all():
        grouped[permission.door_id].append(
            DoorPermissionWithTag.model_validate(
                {**permission.model_dump(), "tag": TagSummary.model_validate(tag)}
            )
        )
    return grouped


async def list_doors(session: AsyncSession) -> List[DoorListItem]:
    """All doors with their permissions (and tags) and access attempt counts."""
    result = await session.execute(select(Door).order_by(Door.id))
    doors = list(result.scalars().all())
    door_ids = [door.id for door in doors]

    permissions = await _permissions_by_door(session, door_ids)

    counts_result = await session.execute(
        select(AccessHistory.door_id, func.count()).group_by(AccessHistory.door_id)
    )
    counts = dict(counts_result.all())

    return [
        DoorListItem(
            **DoorRead.model_validate(door).model_dump(),
            permissions=permissions[door.id],
            access_history_count=counts.get(door.id, 0),
        )
        for door in doors
    ]


async def get_door(session: AsyncSession, door_id: int) -> DoorDetail:
    """One door with its permissions and the newest access attempts."""
    door = await crud.get_or_404(session, Door, door_id, "Door")
    permissions = await _permissions_by_door(session, [door.id])

    history_result = await session.execute(
        select(AccessHistory)
        .where(AccessHistory.door_id == door.id)
        .order_by(AccessHistory.timestamp.desc(), AccessHistory.id.desc())
        .limit(RECENT_HISTORY_LIMIT)
    )
    recent = [DoorAccessEntry.model_validate(row) for row in history_result.scalars().all()]

    return DoorDetail(
        **DoorRead.model_validate(door).model_dump(),
        permissions=permissions[door.id],
        access_history=recent,
    )


async def create_door(session: AsyncSession, data: DoorCreate) -> Door:
    door = await crud.insert(
        session,
        Door(name=data.name, location=data.location, client_id=data.client_id),
        _conflict_message(data.client_id),
    )
    app_logger.info(f"Door created: {door.name} ({door.client_id}), ID: {door.id}")
    return door


async def update_door(session: AsyncSession, door_id: int, data: DoorUpdate) -> Door:
    door = await crud.get_or_404(session, Door, door_id, "Door")
    changes = data.model_dump(exclude_unset=True)
    door = await crud.patch(
        session, door, changes, _conflict_message(changes.get("client_id", door.client_id))
    )
    app_logger.info(f"Door {door.id} updated: {sorted(changes)}")
    return door


async def delete_door(session: AsyncSession, door_id: int) -> None:
    """Hard delete a door together with its permissions and access history."""
    await session.execute(delete(DoorPermission).where(DoorPermission.door_id == door_id))
    await session.execute(delete(AccessHistory).where(AccessHistory.door_id == door_id))
    await crud.delete_by_id(session, Door, door_id, "Door")
    app_logger.info(f"Door {door_id} deleted")
