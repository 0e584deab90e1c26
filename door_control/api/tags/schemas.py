"""Tag, permission and validation schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from door_control.api.common import ApiModel, RequestModel


class TagCreate(RequestModel):
    """Request schema for registering an NFC tag."""

    tag_id: str = Field(..., min_length=1, max_length=255, description="Id encoded on the tag")
    name: Optional[str] = Field(default=None, max_length=255)
    owner_name: Optional[str] = Field(default=None, max_length=255)

    model_config = {"json_schema_extra": {"example": {
        "tagId": "04A224B2C35E80",
        "name": "Blue key fob",
        "ownerName": "Jane Doe",
    }}}


class TagUpdate(RequestModel):
    """Partial update; omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, max_length=255)
    owner_name: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None


class TagRead(ApiModel):
    id: int
    tag_id: str
    name: Optional[str] = None
    owner_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DoorSummary(ApiModel):
    id: int
    name: str
    location: Optional[str] = None
    client_id: str
    is_active: bool


class PermissionRead(ApiModel):
    id: int
    door_id: int
    tag_id: int
    is_active: bool
    created_at: datetime


class TagPermissionWithDoor(PermissionRead):
    door: DoorSummary


class TagDetail(TagRead):
    permissions: List[TagPermissionWithDoor] = []


class RemovedPermissions(ApiModel):
    count: int


class ValidateTagRequest(RequestModel):
    """Validation request sent by an edge device."""

    tag_id: str = Field(..., min_length=1, description="Tag id read by the device")
    client_id: str = Field(..., min_length=1, description="Client id of the device")
    image: Optional[str] = Field(default=None, description="Base64 encoded snapshot")

    model_config = {"json_schema_extra": {"example": {
        "tagId": "04A224B2C35E80",
        "clientId": "door-1",
    }}}


class ValidateTagResponse(ApiModel):
    allowed: bool
    door_id: Optional[int] = None
