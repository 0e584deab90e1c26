"""Models module - imports all models for SQLModel registration."""

# Import all models so SQLModel can register them
from door_control.models.door import Door
from door_control.models.nfc_tag import NfcTag
from door_control.models.door_permission import DoorPermission
from door_control.models.access_history import AccessHistory
from door_control.models.tamper_log import TamperLog, TamperState
from door_control.models.user import User

__all__ = [
    "Door",
    "NfcTag",
    "DoorPermission",
    "AccessHistory",
    "TamperLog",
    "TamperState",
    "User",
]
