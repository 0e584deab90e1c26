"""JWT token helpers for operator authentication."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from door_control.config.settings import settings

ALGORITHM = "HS256"


def create_access_token(user_id: int, username: str, role: str) -> str:
    """Create a signed JWT access token for an operator."""
    now = datetime.now(timezone.utc)
    exp = now + timedelta(seconds=settings.LOCAL_AUTH_TOKEN_EXP_SECONDS)
    payload = {
        "sub": str(user_id),
        "username": username,
        "role": role,
        "exp": exp,
        "iat": now,
    }
    return jwt.encode(payload, settings.LOCAL_AUTH_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and verify a JWT token.

    Raises:
        ValueError: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.LOCAL_AUTH_SECRET,
            algorithms=[ALGORITHM],
        )
    except JWTError as exc:
        raise ValueError(f"Invalid token: {exc}") from exc
