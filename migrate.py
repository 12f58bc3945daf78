#!/usr/bin/env python3
"""
Database management script.
Creates, drops, resets and seeds the dashboard tables.
"""

import asyncio
import argparse
import logging
import sys

from app.config import settings
from app.database import create_tables, drop_tables, get_session_factory, close_db_connection
from app.repositories.user import UserRepository

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123456"


async def seed_database() -> None:
    """Create the initial dashboard user if it does not exist."""
    logger.info("Seeding database with initial data")

    async with get_session_factory()() as session:
        users = UserRepository(session)

        if await users.get_by_email(ADMIN_EMAIL):
            logger.info("Admin user already exists, skipping seed")
            return

        await users.create_user({
            "email": ADMIN_EMAIL,
            "password": ADMIN_PASSWORD,
            "full_name": "Dashboard Administrator",
        })

    logger.info("Database seeded successfully")
    logger.info(f"  Email: {ADMIN_EMAIL}")
    logger.info(f"  Password: {ADMIN_PASSWORD}")
    logger.warning("Please change the admin password in production!")


async def reset_database() -> None:
    """Drop and recreate all tables, then seed."""
    logger.warning("Resetting database - all data will be lost!")
    await drop_tables()
    await create_tables()
    await seed_database()
    logger.info("Database reset completed")


async def run(command: str) -> None:
    try:
        if command == "create":
            await create_tables()
        elif command == "drop":
            await drop_tables()
        elif command == "seed":
            await seed_database()
        elif command == "reset":
            await reset_database()
    finally:
        await close_db_connection()


def main():
    """Command line interface for database management."""
    parser = argparse.ArgumentParser(description=f"{settings.app_name} database management")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("create", help="Create all tables")
    subparsers.add_parser("drop", help="Drop all tables (development and testing only)")
    subparsers.add_parser("seed", help="Seed database with the admin user")

    reset_parser = subparsers.add_parser("reset", help="Drop, recreate and seed (development only)")
    reset_parser.add_argument("--confirm", action="store_true", help="Confirm database reset")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    if args.command == "reset" and not args.confirm:
        print("Database reset requires --confirm flag")
        return

    try:
        asyncio.run(run(args.command))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
