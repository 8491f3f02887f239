"""
Seed Superadmin User

Creates the first superadmin account. Registration through the API only
creates readonly accounts, so run this once per environment.

Usage:
    cd apps/api
    python scripts/seed_superadmin.py --username root --email root@example.com

The password is read from SEED_SUPERADMIN_PASSWORD, or prompted for.
"""

import argparse
import asyncio
import getpass
import os

from school_admin.core.database import async_session_maker, close_db
from school_admin.core.security import hash_password
from school_admin.modules.users.models import UserRole
from school_admin.modules.users.repository import UserRepository


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create the initial superadmin account.")
    parser.add_argument("--username", default=os.getenv("SEED_SUPERADMIN_USERNAME", "superadmin"))
    parser.add_argument("--email", default=os.getenv("SEED_SUPERADMIN_EMAIL"))
    parser.add_argument("--first-name", default="Super")
    parser.add_argument("--last-name", default="Admin")
    args = parser.parse_args()
    if not args.email:
        parser.error("--email (or SEED_SUPERADMIN_EMAIL) is required")
    return args


async def seed_superadmin(args: argparse.Namespace, password: str) -> None:
    """Create the superadmin user if neither username nor email is taken."""
    async with async_session_maker() as db:
        existing_user = await UserRepository.find_conflicting(
            db, username=args.username, email=args.email
        )
        if existing_user:
            print(f"User already exists: {existing_user.username} <{existing_user.email}>")
            print(f"  ID: {existing_user.id}")
            print(f"  Role: {existing_user.role.value}")
            return

        admin_user = await UserRepository.create(
            db,
            username=args.username,
            email=args.email,
            password_hash=hash_password(password),
            first_name=args.first_name,
            last_name=args.last_name,
            role=UserRole.SUPER_ADMIN,
        )
        await db.commit()

        print("Superadmin created successfully!")
        print(f"  Username: {admin_user.username}")
        print(f"  Email: {admin_user.email}")
        print(f"  ID: {admin_user.id}")

    await close_db()


if __name__ == "__main__":
    arguments = parse_args()
    secret = os.getenv("SEED_SUPERADMIN_PASSWORD") or getpass.getpass("Superadmin password: ")
    asyncio.run(seed_superadmin(arguments, secret))
