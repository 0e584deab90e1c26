"""Authentication utilities and dependency injection."""

from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from door_control.utils.local_tokens import decode_access_token

# HTTP Bearer token security scheme
security_scheme = HTTPBearer(
    scheme_name="Bearer",
    description="Bearer token authentication",
    auto_error=False,  # errors are raised below so they carry WWW-Authenticate
)


class CurrentUser(BaseModel):
    """Operator identity decoded from the bearer token."""

    id: int
    username: str
    role: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_auth_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security_scheme),
) -> str:
    """Extract the Bearer token from the Authorization header.

    Raises:
        HTTPException: If the header or token is missing
    """
    if not credentials:
        raise _unauthorized("Missing or invalid authorization header")

    token = credentials.credentials.strip()
    if not token:
        raise _unauthorized("Missing authentication token")

    return token


async def verify_token(token: str = Depends(get_auth_token)) -> dict:
    """Verify and decode the JWT authentication token.

    Raises:
        HTTPException: If token is invalid, expired or lacks claims
    """
    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized(str(exc)) from exc

    if not payload.get("sub") or not payload.get("username"):
        raise _unauthorized("Invalid token payload")
    return payload


async def require_auth(payload: dict = Depends(verify_token)) -> CurrentUser:
    """Dependency that requires an authenticated operator."""
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        raise _unauthorized("Token payload missing user identifier")

    return CurrentUser(
        id=user_id,
        username=payload["username"],
        role=payload.get("role", "admin"),
    )


RequireAuth = Depends(require_auth)
