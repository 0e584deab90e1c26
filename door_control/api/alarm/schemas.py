"""Tamper/alarm request and response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field

from door_control.api.common import ApiModel, RequestModel
from door_control.models.tamper_log import TamperState

# 9999-12-31T23:59:59.999Z, the latest instant a datetime can hold
MAX_EPOCH_MS = 253402300799999


class ReportTamperRequest(RequestModel):
    """Tamper report sent by an edge device."""

    client_id: str = Field(..., min_length=1, description="Client id of the reporting device")
    type: str = Field(..., min_length=1, description="Kind of event, e.g. 'tamper'")
    timestamp: Optional[int] = Field(
        default=None,
        ge=0,
        le=MAX_EPOCH_MS,
        description="Event time in milliseconds since the epoch",
    )
    image: Optional[str] = Field(default=None, description="Base64 encoded snapshot")

    model_config = {"json_schema_extra": {"example": {
        "clientId": "door-1",
        "type": "tamper",
    }}}


class ReportTamperResponse(ApiModel):
    success: bool = True
    message: str
    log_id: int


class UpdateTamperLogRequest(RequestModel):
    resolved: Optional[bool] = None
    notes: Optional[str] = None


class ResolveTamperLogRequest(RequestModel):
    notes: Optional[str] = None


class TamperLogRead(ApiModel):
    id: int
    client_id: str
    timestamp: datetime
    image: Optional[str] = None
    resolved: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def state(self) -> TamperState:
        return TamperState.RESOLVED if self.resolved else TamperState.UNRESOLVED


class TamperStatistics(ApiModel):
    total: int
    unresolved: int
    resolved: int
