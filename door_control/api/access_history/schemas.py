"""Access history response schemas."""

from datetime import datetime
from typing import Optional

from door_control.api.common import ApiModel


class HistoryDoor(ApiModel):
    id: int
    name: str
    location: Optional[str] = None
    client_id: str
    is_active: bool


class AccessHistoryRead(ApiModel):
    id: int
    door_id: int
    tag_id: str
    access_granted: bool
    timestamp: datetime
    client_ip: Optional[str] = None
    image: Optional[str] = None
    door: Optional[HistoryDoor] = None


class AccessStats(ApiModel):
    total_access: int
    successful_access: int
    failed_access: int
    success_rate: float
