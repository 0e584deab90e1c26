"""Script to create (or replace) an operator account interactively."""

import asyncio
import getpass
import sys
from pathlib import Path

# Add the parent directory to the path so we can import door_control
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from door_control.db.db import init_db, close_db, db_session
from door_control.models.user import User
from door_control.services.users import create_user, get_user_by_username


def ask_password() -> str:
    while True:
        password = getpass.getpass("Password: ")
        if not password.strip():
            print("Password cannot be empty!")
            continue
        if password != getpass.getpass("Confirm password: "):
            print("Passwords do not match! Try again.\n")
            continue
        return password


async def seed_admin_user():
    """Create the admin user, asking before overwriting an existing one."""
    await init_db()

    try:
        async with db_session() as session:
            username = input("Username (default: admin): ").strip() or "admin"

            existing = await get_user_by_username(session, username)
            if existing:
                answer = input(f"User '{username}' already exists. Overwrite? (y/N): ")
                if answer.strip().lower() not in ("y", "yes"):
                    print("Canceled. Keeping the existing user.")
                    return existing
                await session.execute(delete(User).where(User.id == existing.id))
                await session.commit()
                print(f"Existing user '{username}' deleted.")

            password = ask_password()
            user = await create_user(session, username, password, role="admin")

            print("=" * 50)
            print("Admin user created successfully!")
            print("=" * 50)
            print(f"Username: {user.username}")
            print(f"Role: {user.role}")
            print(f"User ID: {user.id}")
            print("=" * 50)
            return user
    finally:
        await close_db()


async def main():
    """Main entry point."""
    print("NFC Door Control - admin seeding")
    await seed_admin_user()
    print("Done!")


if __name__ == "__main__":
    asyncio.run(main())
