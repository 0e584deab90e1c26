"""Access history model (audit trail of validation attempts)."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel


class AccessHistory(SQLModel, table=True):
    """One row per validation attempt, granted or not.

    tag_id holds the presented tag string and is deliberately not a foreign
    key: unknown tags are audited too.
    """

    __tablename__ = "access_history"

    id: int | None = Field(default=None, primary_key=True)
    door_id: int = Field(foreign_key="doors.id", ondelete="CASCADE", index=True)
    tag_id: str = Field(max_length=255, index=True)
    access_granted: bool = Field(index=True)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), index=True)
    )
    client_ip: str | None = Field(default=None, max_length=64)
    image: str | None = Field(default=None, sa_column=Column(Text))  # base64
