"""Tamper log model."""

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Column, DateTime, Text
from sqlmodel import Field, SQLModel


class TamperState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class TamperLog(SQLModel, table=True):
    """Edge-reported tamper event awaiting operator review."""

    __tablename__ = "tamper_logs"

    id: int | None = Field(default=None, primary_key=True)
    client_id: str = Field(max_length=255, index=True)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True), index=True)
    )
    image: str | None = Field(default=None, sa_column=Column(Text))  # base64
    resolved: bool = Field(default=False, index=True)
    notes: str | None = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column=Column(DateTime(timezone=True))
    )

    @property
    def state(self) -> TamperState:
        return TamperState.RESOLVED if self.resolved else TamperState.UNRESOLVED
