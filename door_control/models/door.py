"""Door model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class Door(SQLModel, table=True):
    """A physical door bound to one edge device."""

    __tablename__ = "doors"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    location: str | None = Field(default=None, max_length=255)
    client_id: str = Field(unique=True, index=True, max_length=255)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
