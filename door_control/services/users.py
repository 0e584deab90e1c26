"""Operator account service."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from door_control.db import crud
from door_control.models.user import User
from door_control.utils.passwords import hash_password, verify_password


async def get_user_by_username(session: AsyncSession, username: str) -> Optional[User]:
    return await crud.first(session, User, User.username == username)


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def create_user(session: AsyncSession, username: str, password: str, role: str = "admin") -> User:
    return await crud.insert(
        session,
        User(username=username, hashed_password=hash_password(password), role=role),
        f"User '{username}' already exists",
    )


async def authenticate(session: AsyncSession, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""
    user = await get_user_by_username(session, username)
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user
