"""Domain exceptions mapped to HTTP responses by the handlers in main.py."""

from fastapi import status


class DoorControlError(Exception):
    """Base class for errors that surface to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DoorControlError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not Found"

    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} with ID {identifier} not found")
        self.resource = resource
        self.identifier = identifier


class ConflictError(DoorControlError):
    """Unique constraint violation (duplicate clientId, tagId, username)."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class InvalidTransitionError(DoorControlError):
    """Requested state change is not allowed (e.g. reopening a resolved tamper log)."""

    status_code = status.HTTP_409_CONFLICT
    error = "Invalid Transition"
