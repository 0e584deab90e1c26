"""Tag access validation for edge devices.

Decides whether a presented tag may open the door bound to a device and
writes one access history row per attempt. The decision logic only talks to
three injected callables, so it can run against the database (see
``SessionAccessStore``) or against fakes in tests.

The lookups and the audit insert are independent round trips; no transaction
spans them.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from door_control.config.logger import app_logger
from door_control.models.access_history import AccessHistory
from door_control.models.door import Door
from door_control.models.door_permission import DoorPermission
from door_control.models.nfc_tag import NfcTag

# (client_id, active_only) -> door or None
DoorLookup = Callable[[str, bool], Awaitable[Optional[Door]]]
# (tag_id, door_id) -> active permissions of the active tag on that door,
# or None when no active tag has that id
PermissionLookup = Callable[[str, int], Awaitable[Optional[List[DoorPermission]]]]
# (door_id, tag_id, granted, client_ip, image)
AuditWriter = Callable[[int, str, bool, Optional[str], Optional[str]], Awaitable[None]]


@dataclass
class AccessDecision:
    allowed: bool
    door_id: Optional[int] = None


async def decide_access(
    tag_id: str,
    client_id: str,
    *,
    find_door: DoorLookup,
    find_permissions: PermissionLookup,
    record_attempt: AuditWriter,
    image: Optional[str] = None,
    client_ip: Optional[str] = None,
    swallow_audit_errors: bool = True,
) -> AccessDecision:
    """Return the access decision for ``tag_id`` presented at ``client_id``.

    Every attempt that can be attributed to a door is audited, including
    attempts at inactive doors. An unknown client id yields a denial without
    an audit row. With ``swallow_audit_errors`` (the default) a failed audit
    write is logged and the decision is returned unchanged; otherwise the
    error propagates.
    """

    async def audit(door_id: int, granted: bool) -> None:
        try:
            await record_attempt(door_id, tag_id, granted, client_ip, image)
        except Exception as e:
            if not swallow_audit_errors:
                raise
            app_logger.error(f"Failed to log access history for door {door_id}: {e}")

    door = await find_door(client_id, True)
    if door is None:
        app_logger.info(f"Access denied: door not found for clientId: {client_id}, tagId: {tag_id}")
        inactive_door = await find_door(client_id, False)
        if inactive_door is None:
            return AccessDecision(allowed=False)
        inactive_door_id = inactive_door.id
        await audit(inactive_door_id, False)
        return AccessDecision(allowed=False, door_id=inactive_door_id)

    # a failed audit rolls the session back and expires loaded rows
    door_id, door_name, door_client_id = door.id, door.name, door.client_id

    permissions = await find_permissions(tag_id, door_id)
    allowed = bool(permissions)

    await audit(door_id, allowed)

    if allowed:
        app_logger.info(f"Access granted: tagId: {tag_id}, door: {door_name} ({door_client_id})")
    elif permissions is None:
        app_logger.info(f"Access denied: tag not found or inactive: {tag_id} for door: {door_name}")
    else:
        app_logger.info(f"Access denied: tag {tag_id} has no permission for door: {door_name}")

    return AccessDecision(allowed=allowed, door_id=door_id)


class SessionAccessStore:
    """Database implementations of the validator's lookups and audit writer."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_door(self, client_id: str, active_only: bool) -> Optional[Door]:
        stmt = select(Door).where(Door.client_id == client_id)
        if active_only:
            stmt = stmt.where(Door.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_permissions(self, tag_id: str, door_id: int) -> Optional[List[DoorPermission]]:
        result = await self.session.execute(
            select(NfcTag).where(NfcTag.tag_id == tag_id, NfcTag.is_active == True)  # noqa: E712
        )
        tag = result.scalar_one_or_none()
        if tag is None:
            return None

        result = await self.session.execute(
            select(DoorPermission).where(
                DoorPermission.tag_id == tag.id,
                DoorPermission.door_id == door_id,
                DoorPermission.is_active == True,  # noqa: E712
            )
        )
        return list(result.scalars().all())

    async def record_attempt(
        self,
        door_id: int,
        tag_id: str,
        granted: bool,
        client_ip: Optional[str],
        image: Optional[str],
    ) -> None:
        self.session.add(
            AccessHistory(
                door_id=door_id,
                tag_id=tag_id,
                access_granted=granted,
                client_ip=client_ip,
                image=image or None,
            )
        )
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise


async def validate_tag_access(
    session: AsyncSession,
    tag_id: str,
    client_id: str,
    image: Optional[str] = None,
    client_ip: Optional[str] = None,
) -> AccessDecision:
    """Validate a tag against the database bound to ``session``."""
    store = SessionAccessStore(session)
    return await decide_access(
        tag_id,
        client_id,
        find_door=store.find_door,
        find_permissions=store.find_permissions,
        record_attempt=store.record_attempt,
        image=image,
        client_ip=client_ip,
    )
