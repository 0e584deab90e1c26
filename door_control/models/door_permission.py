"""Door permission model (tag <-> door join table)."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class DoorPermission(SQLModel, table=True):
    """Grants one tag access to one door.

    No unique constraint on (door_id, tag_id): assigning the same pair twice
    creates two rows, and removal deletes all of them.
    """

    __tablename__ = "door_permissions"

    id: int | None = Field(default=None, primary_key=True)
    door_id: int = Field(foreign_key="doors.id", ondelete="CASCADE", index=True)
    tag_id: int = Field(foreign_key="nfc_tags.id", ondelete="CASCADE", index=True)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
