"""NFC tag model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class NfcTag(SQLModel, table=True):
    """A physical NFC token, identified by the id encoded on the chip."""

    __tablename__ = "nfc_tags"

    id: int | None = Field(default=None, primary_key=True)
    tag_id: str = Field(unique=True, index=True, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    owner_name: str | None = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
