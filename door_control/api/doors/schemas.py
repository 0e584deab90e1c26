"""Door request and response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from door_control.api.common import ApiModel, RequestModel


class DoorCreate(RequestModel):
    """Request schema for registering a door."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    location: Optional[str] = Field(default=None, max_length=255)
    client_id: str = Field(
        ..., min_length=1, max_length=255, description="Client id the edge device reports"
    )

    model_config = {"json_schema_extra": {"example": {
        "name": "Front",
        "location": "Ground floor",
        "clientId": "door-1",
    }}}


class DoorUpdate(RequestModel):
    """Partial update; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    client_id: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_active: Optional[bool] = None


class DoorRead(ApiModel):
    id: int
    name: str
    location: Optional[str] = None
    client_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class TagSummary(ApiModel):
    id: int
    tag_id: str
    name: Optional[str] = None
    owner_name: Optional[str] = None
    is_active: bool


class DoorPermissionWithTag(ApiModel):
    id: int
    door_id: int
    tag_id: int
    is_active: bool
    created_at: datetime
    tag: TagSummary


class DoorAccessEntry(ApiModel):
    id: int
    tag_id: str
    access_granted: bool
    timestamp: datetime
    client_ip: Optional[str] = None


class DoorListItem(DoorRead):
    permissions: List[DoorPermissionWithTag] = []
    access_history_count: int = 0


class DoorDetail(DoorRead):
    permissions: List[DoorPermissionWithTag] = []
    access_history: List[DoorAccessEntry] = Field(
        default=[], description="Newest access attempts at this door"
    )
