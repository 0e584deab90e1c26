"""Tag registry and permission management service."""

from typing import Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.api.tags.schemas import (
    DoorSummary,
    TagCreate,
    TagDetail,
    TagPermissionWithDoor,
    TagRead,
    TagUpdate,
)
from door_control.config.logger import app_logger
from door_control.db import crud
from door_control.models.door import Door
from door_control.models.door_permission import DoorPermission
from door_control.models.nfc_tag import NfcTag
from door_control.utils.errors import NotFoundError


async def _permissions_by_tag(
    session: AsyncSession, tag_ids: List[int]
) -> Dict[int, List[TagPermissionWithDoor]]:
    grouped: Dict[int, List[TagPermissionWithDoor]] = {tag_id: [] for tag_id in tag_ids}
    if not tag_ids:
        return grouped

    result = await session.execute(
        select(DoorPermission, Door)
        .join(Door, Door.id == DoorPermission.door_id)
        .where(DoorPermission.tag_id.in_(tag_ids))
        .order_by(DoorPermission.id)
    )
    for permission, door in result.all():
        grouped[permission.tag_id].append(
            TagPermissionWithDoor.model_validate(
                {**permission.model_dump(), "door": DoorSummary.model_validate(door)}
            )
        )
    return grouped


def _detail(tag: NfcTag, permissions: List[TagPermissionWithDoor]) -> TagDetail:
    return TagDetail(**TagRead.model_validate(tag).model_dump(), permissions=permissions)


async def list_tags(session: AsyncSession) -> List[TagDetail]:
    result = await session.execute(select(NfcTag).order_by(NfcTag.id))
    tags = list(result.scalars().all())
    permissions = await _permissions_by_tag(session, [tag.id for tag in tags])
    return [_detail(tag, permissions[tag.id]) for tag in tags]


async def get_tag(session: AsyncSession, tag_pk: int) -> TagDetail:
    tag = await crud.get_or_404(session, NfcTag, tag_pk, "Tag")
    permissions = await _permissions_by_tag(session, [tag.id])
    return _detail(tag, permissions[tag.id])


async def create_tag(session: AsyncSession, data: TagCreate) -> NfcTag:
    tag = await crud.insert(
        session,
        NfcTag(tag_id=data.tag_id, name=data.name, owner_name=data.owner_name),
        f"A tag with tagId '{data.tag_id}' already exists",
    )
    app_logger.info(f"Tag registered: {tag.tag_id}, ID: {tag.id}")
    return tag


async def update_tag(session: AsyncSession, tag_pk: int, data: TagUpdate) -> NfcTag:
    tag = await crud.get_or_404(session, NfcTag, tag_pk, "Tag")
    changes = data.model_dump(exclude_unset=True)
    tag = await crud.patch(session, tag, changes, f"Tag {tag_pk} could not be updated")
    app_logger.info(f"Tag {tag.id} updated: {sorted(changes)}")
    return tag


async def delete_tag(session: AsyncSession, tag_pk: int) -> None:
    """Hard delete a tag and its permissions. Access history keeps the tag string."""
    await session.execute(delete(DoorPermission).where(DoorPermission.tag_id == tag_pk))
    await crud.delete_by_id(session, NfcTag, tag_pk, "Tag")
    app_logger.info(f"Tag {tag_pk} deleted")


async def assign_to_door(session: AsyncSession, tag_pk: int, door_id: int) -> DoorPermission:
    """Grant a tag access to a door.

    Existing rows for the same pair are not checked; every call inserts.
    """
    if await session.get(NfcTag, tag_pk) is None:
        raise NotFoundError("Tag", tag_pk)
    if await session.get(Door, door_id) is None:
        raise NotFoundError("Door", door_id)

    permission = await crud.insert(
        session,
        DoorPermission(tag_id=tag_pk, door_id=door_id),
        f"Tag {tag_pk} could not be assigned to door {door_id}",
    )
    app_logger.info(f"Tag {tag_pk} assigned to door {door_id} (permission {permission.id})")
    return permission


async def remove_from_door(session: AsyncSession, tag_pk: int, door_id: int) -> int:
    """Delete every permission row linking the tag to the door; return how many."""
    result = await session.execute(
        delete(DoorPermission).where(
            DoorPermission.tag_id == tag_pk,
            DoorPermission.door_id == door_id,
        )
    )
    await session.commit()
    app_logger.info(f"Removed {result.rowcount} permission(s) of tag {tag_pk} on door {door_id}")
    return result.rowcount
