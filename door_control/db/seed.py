"""Database seed helpers."""

from door_control.config.logger import app_logger
from door_control.config.settings import settings
from door_control.db.db import db_session
from door_control.services.users import create_user, get_user_by_username


async def ensure_seed_admin_user() -> None:
    """Create the configured admin account if it doesn't exist.

    Skipped when SEED_ADMIN_PASSWORD is empty.
    """
    username = settings.SEED_ADMIN_USERNAME
    if not settings.SEED_ADMIN_PASSWORD:
        app_logger.info("SEED_ADMIN_PASSWORD not set; skipping admin seeding")
        return

    try:
        async with db_session() as session:
            if await get_user_by_username(session, username):
                app_logger.info(f"Seed admin user already exists: {username}")
                return

            await create_user(session, username, settings.SEED_ADMIN_PASSWORD, role="admin")
            app_logger.info(f"Seeded default admin user: {username}")
    except Exception as e:
        app_logger.warning(f"Failed to seed admin user: {e}")
